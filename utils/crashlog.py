# utils/crashlog.py
import os, sys, faulthandler, datetime, traceback
from typing import Dict, Optional

_fault_file = None
_context: Dict[str, str] = {}

def log_dir() -> str:
    d = os.environ.get("ROLLMIX_LOG_DIR") or os.path.join(os.getcwd(), "logs")
    os.makedirs(d, exist_ok=True)
    return d

def set_context(**fields):
    """Remember what this run was doing (input file, parts, outputs) for crash reports."""
    _context.update({k: str(v) for k, v in fields.items() if v is not None})

def _report_path(kind: str) -> str:
    stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    return os.path.join(log_dir(), f"{kind}-{stamp}.txt")

def _write_report(kind: str, title: str, exc: BaseException) -> str:
    path = _report_path(kind)
    with open(path, "w", encoding="utf-8") as out:
        out.write(f"rollmix {kind} report: {title}\n")
        out.write(f"command: {' '.join(sys.argv)}\n")
        for key in sorted(_context):
            out.write(f"{key}: {_context[key]}\n")
        out.write(f"{type(exc).__name__}: {exc}\n\n")
        out.writelines(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return path

def setup_crashlog(native: bool = True):
    """Send native faults and uncaught exceptions to report files in log_dir()."""
    global _fault_file
    if native and _fault_file is None:
        try:
            _fault_file = open(_report_path("native"), "w", encoding="utf-8")
            faulthandler.enable(_fault_file)
        except OSError:
            _fault_file = None

    def _hook(exc_type, exc, tb):
        try:
            _write_report("crash", "uncaught exception", exc.with_traceback(tb))
        finally:
            sys.__excepthook__(exc_type, exc, tb)
    sys.excepthook = _hook

def log_exception(title: str, exc: BaseException) -> Optional[str]:
    """Write an error report for ``exc``; returns its path, or None if it could not be written."""
    try:
        return _write_report("error", title, exc)
    except OSError:
        return None
