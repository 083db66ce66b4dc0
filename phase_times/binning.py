"""
Rank compilations by size and aggregate them into bins.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .compilations import PhaseTimes

DEFAULT_BINS = 50


@dataclass
class Bin:
    lo: int
    hi: int
    times: PhaseTimes
    # Sum of member medians; informational only, ratios use times.median.
    median_sum: int = 0


def sort_samples(samples: List[PhaseTimes]) -> List[PhaseTimes]:
    """Ascending by total, median breaking ties."""
    return sorted(samples, key=lambda s: (s.total, s.median))


def bin_bounds(n_samples: int, n_bins: int = DEFAULT_BINS) -> List[Tuple[int, int]]:
    """
    Half-open rank ranges [lo, hi) produced by stepping a float cursor by
    n_samples / n_bins. Consecutive ranges share their boundary, so together
    they cover [0, n_samples). Ranges may be empty when n_samples < n_bins.
    """
    if n_bins < 1:
        raise ValueError(f"bin count must be positive, got {n_bins}")
    bounds: List[Tuple[int, int]] = []
    binsize = n_samples / n_bins
    a = 0.0
    while a < n_samples:
        nxt = a + binsize
        bounds.append((int(a), min(int(nxt), n_samples)))
        a = nxt
    return bounds


def aggregate(samples: List[PhaseTimes], n_phases: int) -> Tuple[PhaseTimes, int]:
    """
    Sum phase vectors and totals, then recompute the median over the summed
    phase vector. Also returns the sum of the per-sample medians.
    """
    agg = PhaseTimes.sized(n_phases)
    median_sum = 0
    for sample in samples:
        median_sum += sample.median
        agg.total += sample.total
        agg.grow(len(sample.phases))
        for j, t in enumerate(sample.phases):
            agg.phases[j] += t
    agg.compute_median_time()
    return agg, median_sum


def make_bins(samples: List[PhaseTimes], n_phases: int, n_bins: int = DEFAULT_BINS) -> List[Bin]:
    """Sort `samples` and return the populated bins in rank order."""
    ranked = sort_samples(samples)
    bins: List[Bin] = []
    for lo, hi in bin_bounds(len(ranked), n_bins):
        if hi <= lo:
            continue
        times, median_sum = aggregate(ranked[lo:hi], n_phases)
        bins.append(Bin(lo, hi, times, median_sum))
    return bins
