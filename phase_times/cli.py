#!/usr/bin/env python3
"""
phase-times

Reads a build log (a file, or standard input) produced with
-gcflags=all=-d=ssa/all/time=1 and writes one <CONFIG>.csv per build
configuration found in it.

For each configuration, compilations are sorted by total time (sum over all
phases) and split into bins. For each bin and phase the report gives the bin
total for that phase divided by the bin's median phase time, so a phase
whose cost grows non-linearly with input size shows up as a rising ratio.
"""

import argparse
import io
import os
import sys
from typing import List, Optional

from .binning import DEFAULT_BINS, make_bins
from .errors import PhaseTimesError
from .parse import PhaseLog, parse_lines
from .report import write_report

# ============================================================
# Config defaults (override via CLI flags)
# ============================================================

DEFAULT_OUT_DIR = "."


def write_reports(log: PhaseLog, out_dir: str = DEFAULT_OUT_DIR, n_bins: int = DEFAULT_BINS,
                  plot: bool = False) -> List[str]:
    """Bin and write every configuration in first-seen order; returns CSV paths."""
    phase_names = log.phases.names()
    written = []
    for name, cfg in log.configs.items():
        bins = make_bins(cfg.samples(), len(phase_names), n_bins)
        out_csv = os.path.join(out_dir, f"{name}.csv")
        write_report(out_csv, name, phase_names, bins)
        print(f"[OK] {name}: wrote {out_csv} ({len(cfg)} compilations, {len(bins)} bins)")
        written.append(out_csv)

        if plot:
            from .plot import plot_report
            out_png = os.path.join(out_dir, f"{name}.png")
            if plot_report(out_png, name, phase_names, bins):
                print(f"[OK] {name}: wrote {out_png}")
            else:
                print(f"[WARN] {name}: nothing to plot")
    return written


def run(input_path: Optional[str], out_dir: str = DEFAULT_OUT_DIR, n_bins: int = DEFAULT_BINS,
        plot: bool = False) -> List[str]:
    print("[INFO] input:", input_path if input_path else "<stdin>")
    if input_path:
        with open(input_path, "r", encoding="utf-8", errors="replace") as f:
            log = parse_lines(f)
    else:
        stdin = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="replace")
        try:
            log = parse_lines(stdin)
        finally:
            stdin.detach()

    if not log.configs:
        print("[WARN] no configuration header found in input")
        return []
    print("[INFO] configurations:", ", ".join(log.configs))
    print(f"[INFO] phases: {len(log.phases)}, timing lines: {log.timing_lines}")
    return write_reports(log, out_dir, n_bins, plot)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Binned compiler phase timing profiles, one CSV per configuration.")
    ap.add_argument("input", nargs="?", default=None, help="Build log to read (default: standard input).")
    ap.add_argument("--out-dir", default=DEFAULT_OUT_DIR, help="Where to write <CONFIG>.csv (default: cwd).")
    ap.add_argument("--bins", type=int, default=DEFAULT_BINS, help=f"Number of bins (default: {DEFAULT_BINS}).")
    ap.add_argument("--plot", action="store_true", help="Also write <CONFIG>.png line charts.")
    args = ap.parse_args(argv)

    if args.bins < 1:
        ap.error("--bins must be at least 1")

    try:
        run(args.input, args.out_dir, args.bins, args.plot)
    except PhaseTimesError as e:
        raise SystemExit(f"[ERROR] {e}")
    except OSError as e:
        raise SystemExit(f"[ERROR] {e}")


if __name__ == "__main__":
    main()
