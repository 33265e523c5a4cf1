import sys

import pytest

from utils import crashlog


@pytest.fixture(autouse=True)
def _log_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("ROLLMIX_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(crashlog, "_context", {})


def _raise(exc):
    try:
        raise exc
    except type(exc) as caught:
        return caught


class TestCrashlog:
    def test_log_dir_comes_from_environment(self, tmp_path):
        assert crashlog.log_dir() == str(tmp_path / "logs")
        assert (tmp_path / "logs").is_dir()

    def test_error_report_carries_run_context(self):
        crashlog.set_context(input="song.mid", parts="1,0 2,1", output=None)
        path = crashlog.log_exception("page write", _raise(RuntimeError("disk full")))
        text = open(path, encoding="utf-8").read()
        assert text.startswith("rollmix error report: page write\n")
        assert "input: song.mid" in text
        assert "parts: 1,0 2,1" in text
        assert "output:" not in text
        assert "RuntimeError: disk full" in text
        assert "Traceback" in text

    def test_reports_do_not_overwrite_each_other(self):
        first = crashlog.log_exception("one", _raise(ValueError("a")))
        second = crashlog.log_exception("two", _raise(ValueError("b")))
        assert first != second

    def test_uncaught_exception_hook(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setattr(sys, "excepthook", sys.excepthook)
        crashlog.setup_crashlog(native=False)
        exc = _raise(KeyError("boom"))
        sys.excepthook(type(exc), exc, exc.__traceback__)
        (report,) = (tmp_path / "logs").glob("crash-*.txt")
        assert "rollmix crash report: uncaught exception" in report.read_text(encoding="utf-8")
        assert "KeyError" in capsys.readouterr().err
