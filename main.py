# main.py
import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

from app import App
from config import AppConfig, MergeConfig, RollConfig
from notes.model import ParseError, RollError
from notes.selection import Selection, parse_divisor, parse_selector
from utils.crashlog import log_dir, log_exception, set_context, setup_crashlog

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def _init_logging(verbose: bool = False):
    if logging.getLogger().handlers:
        return

    logging.basicConfig(
        level=logging.DEBUG,
        format=LOG_FORMAT,
        encoding="utf-8"
    )
    root = logging.getLogger()
    root.handlers[0].setLevel(logging.DEBUG if verbose else logging.WARNING)
    try:
        from logging.handlers import RotatingFileHandler
        fh = RotatingFileHandler(os.path.join(log_dir(), "app.log"), maxBytes=2*1024*1024,
                                 backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(fh)
    except OSError as e:
        logging.warning("file logging disabled: %s", e)

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="rollmix",
        description="Merge selected MIDI parts into one piano roll page and MIDI file.")
    ap.add_argument('input', help="source MIDI file")
    ap.add_argument('parts', nargs='*', metavar='PART',
                    help="TRACK,CHANNEL[+SHIFT|-SHIFT] to merge; a trailing /N compresses the roll")
    ap.add_argument('-o', '--output', help="page image path (default: INPUT.png)")
    ap.add_argument('-m', '--midi-out', help="merged MIDI path (default: INPUT.roll.mid)")
    ap.add_argument('--fudge-ticks', type=int, default=None,
                    help="re-press tolerance in ticks (default: a third of a beat)")
    ap.add_argument('--feed', type=float, default=1.0, help="roll inches per second of music")
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap

def split_parts(args: List[str]) -> Tuple[List[Selection], float]:
    selections: List[Selection] = []
    divisor = 1.0
    for arg in args:
        if arg.startswith('/'):
            divisor = parse_divisor(arg)
        else:
            selections.append(parse_selector(arg))
    return selections, divisor

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_intermixed_args(argv)
    _init_logging(args.verbose)
    setup_crashlog()
    set_context(input=args.input, parts=" ".join(args.parts), output=args.output, midi_out=args.midi_out)

    try:
        selections, divisor = split_parts(args.parts)
        if not args.feed > 0:
            raise ParseError(f"--feed must be positive, got {args.feed}")
        cfg = AppConfig(
            merge=MergeConfig(fudge_ticks=args.fudge_ticks),
            roll=RollConfig(divisor=divisor, feed_rate=args.feed),
        )
        App(cfg).run(args.input, selections, args.output, args.midi_out)
    except RollError as e:
        print(f"error: {e}", file=sys.stderr)
        logging.debug("fatal: %s", e)
        return 1
    except Exception as e:
        log_exception("Top-level exception", e)
        logging.error("unhandled exception: %s", e, exc_info=True)
        raise
    return 0

if __name__ == '__main__':
    sys.exit(main())
