"""
CSV report: one row per bin of phase-sum / bin-median ratios, then a row
of raw per-phase totals.
"""

import csv
import math
import os
from typing import List

from .binning import Bin

TITLE_FMT = ("{cfg}:Binned compilation phase timing profiles, bin total of phase times"
             " / bin total of per-compilation median phase times")
TOTAL_HEADER = "TOTAL (ns)"
TOTALS_LABEL = "PHASE TOTALS (ns)"


def ratio(phase_sum: int, median: int) -> float:
    """phase_sum / median; inf or nan instead of raising when median is 0."""
    if median == 0:
        return math.inf if phase_sum else math.nan
    return phase_sum / median


def fmt_ratio(x: float) -> str:
    return "%5.2f" % x


def header_row(cfg: str, phase_names: List[str]) -> List[str]:
    return [TITLE_FMT.format(cfg=cfg)] + list(phase_names) + [TOTAL_HEADER]


def bin_row(b: Bin, n_phases: int) -> List[str]:
    row = [f"[{b.lo},{b.hi})"]
    for i in range(n_phases):
        row.append(fmt_ratio(ratio(b.times.phases[i], b.times.median)))
    row.append(fmt_ratio(float(b.times.total)))
    return row


def phase_totals(bins: List[Bin], n_phases: int) -> List[int]:
    totals = [0] * n_phases
    for b in bins:
        for i in range(n_phases):
            totals[i] += b.times.phases[i]
    return totals


def totals_row(bins: List[Bin], n_phases: int) -> List[str]:
    totals = phase_totals(bins, n_phases)
    return [TOTALS_LABEL] + [str(t) for t in totals] + [str(sum(totals))]


def report_rows(cfg: str, phase_names: List[str], bins: List[Bin]) -> List[List[str]]:
    n = len(phase_names)
    rows = [header_row(cfg, phase_names)]
    rows.extend(bin_row(b, n) for b in bins)
    rows.append(totals_row(bins, n))
    return rows


def write_report(out_csv: str, cfg: str, phase_names: List[str], bins: List[Bin]) -> None:
    os.makedirs(os.path.dirname(out_csv) or ".", exist_ok=True)
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f, lineterminator="\n")
        w.writerows(report_rows(cfg, phase_names, bins))
