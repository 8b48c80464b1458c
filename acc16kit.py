#!/usr/bin/env python3
"""
acc16kit — Accumulator Machine Toolkit
======================================

Runs the built-in demonstration programs on the sign-magnitude
accumulator machine and prints the trace, the final registers and the
memory dump.

    acc16kit demos   — List demonstration programs
    acc16kit run     — Run a demo, print trace + final registers
    acc16kit dump    — Print the memory image of a demo

Usage:
    python acc16kit.py <command> [options]
    python acc16kit.py <command> --help

Examples:
    python acc16kit.py run sum
    python acc16kit.py run countdown --max-steps 100 --dump
    python acc16kit.py run store --quiet -v
    python acc16kit.py dump shift
"""

import argparse
import logging
import sys

from acc16emu import __version__
from acc16emu.emu import AccumulatorMachine, StopReason
from acc16emu.faults import MachineFault
from acc16emu.log_setup import setup_logging
from acc16emu.mem.memory import Memory
from acc16emu.program import DEMOS


def build_parser():
    parser = argparse.ArgumentParser(
        prog="acc16kit",
        description="Sign-magnitude 16-bit accumulator machine — run and inspect demo programs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""commands:
  demos      List demonstration programs
  run        Run a demonstration program
  dump       Print a demonstration program's memory image
""",
    )
    parser.add_argument("--version", action="version", version=f"acc16kit {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Console log level: -v INFO, -vv DEBUG (one line per step)")
    parser.add_argument("--log-file", metavar="DIR", default=None,
                        help="Also write a DEBUG log file into DIR")
    parser.add_argument("--no-rich", action="store_true",
                        help="Plain console logging instead of rich")
    sub = parser.add_subparsers(dest="command", metavar="command")

    # ── demos ────────────────────────────────────────────────────────────
    sub.add_parser("demos", help="List demonstration programs")

    # ── run ──────────────────────────────────────────────────────────────
    p_run = sub.add_parser("run", help="Run a demonstration program")
    p_run.add_argument("demo", choices=sorted(DEMOS), help="Demo name")
    p_run.add_argument("--start", type=int, default=None,
                       help="Start address (default: the demo's own)")
    p_run.add_argument("--max-steps", type=int, default=None,
                       help="Stop with an error after this many instructions")
    p_run.add_argument("--size", type=int, default=None,
                       help="Memory size in words (image is zero-padded)")
    p_run.add_argument("--dump", action="store_true",
                       help="Print memory after the run")
    p_run.add_argument("-q", "--quiet", action="store_true",
                       help="Do not print the per-step trace")

    # ── dump ─────────────────────────────────────────────────────────────
    p_dump = sub.add_parser("dump", help="Print a demo's memory image")
    p_dump.add_argument("demo", choices=sorted(DEMOS), help="Demo name")
    p_dump.add_argument("--size", type=int, default=None,
                        help="Memory size in words (image is zero-padded)")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    if args.verbose >= 2:
        console_level = logging.DEBUG
    elif args.verbose == 1:
        console_level = logging.INFO
    else:
        console_level = logging.WARNING
    setup_logging(console_level=console_level, log_dir=args.log_file,
                  rich_console=not args.no_rich)

    handler = COMMANDS[args.command]
    try:
        return handler(args)
    except MachineFault as e:
        print(f"Machine fault: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


# ═════════════════════════════════════════════════════════════════════════════
# COMMAND IMPLEMENTATIONS
# ═════════════════════════════════════════════════════════════════════════════

# ── demos ────────────────────────────────────────────────────────────────
def cmd_demos(args):
    print(f"{'Name':<10s}  {'Words':>5s}  {'Start':>5s}  Description")
    print(f"{'─'*10}  {'─'*5}  {'─'*5}  {'─'*40}")
    for name in sorted(DEMOS):
        demo = DEMOS[name]
        print(f"{name:<10s}  {len(demo.image):>5d}  {demo.start_pc:>5d}  {demo.description}")
    return 0


# ── run ──────────────────────────────────────────────────────────────────
def cmd_run(args):
    demo = DEMOS[args.demo]
    start = demo.start_pc if args.start is None else args.start

    emu = AccumulatorMachine(Memory(demo.image, size=args.size),
                             start_pc=start, max_steps=args.max_steps)
    if not args.quiet:
        emu.add_observer(lambda record: print(record.format()))

    reason = emu.run(raise_on_fault=False)

    print(emu.regs.display())
    if args.dump:
        print()
        print(emu.dump())

    if reason != StopReason.HALT:
        print(f"Stopped: {reason.value}: {emu.fault}", file=sys.stderr)
        return 1
    return 0


# ── dump ─────────────────────────────────────────────────────────────────
def cmd_dump(args):
    demo = DEMOS[args.demo]
    emu = AccumulatorMachine(Memory(demo.image, size=args.size), start_pc=demo.start_pc)
    print(emu.dump())
    return 0


# ═════════════════════════════════════════════════════════════════════════════
# COMMAND DISPATCH TABLE
# ═════════════════════════════════════════════════════════════════════════════

COMMANDS = {
    "demos": cmd_demos,
    "run": cmd_run,
    "dump": cmd_dump,
}


if __name__ == "__main__":
    sys.exit(main())
