"""
Line chart of the per-bin normalized phase cost for one configuration.
"""

from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .binning import Bin
from .report import ratio


def ratio_matrix(bins: List[Bin], n_phases: int) -> np.ndarray:
    """bins x phases array of phase-sum / bin-median; non-finite cells are NaN."""
    out = np.full((len(bins), n_phases), np.nan, dtype=float)
    for r, b in enumerate(bins):
        for i in range(n_phases):
            out[r, i] = ratio(b.times.phases[i], b.times.median)
    out[~np.isfinite(out)] = np.nan
    return out


def plot_report(outpath: str, cfg: str, phase_names: List[str], bins: List[Bin]) -> bool:
    if len(bins) == 0 or len(phase_names) == 0:
        return False

    data = ratio_matrix(bins, len(phase_names))
    x = np.arange(len(bins))

    fig, ax = plt.subplots(figsize=(12, 6))
    for i, name in enumerate(phase_names):
        col = data[:, i]
        if not np.isfinite(col).any():
            continue
        ax.plot(x, col, marker=".", linewidth=1, label=name)

    ax.set_xticks(x)
    ax.set_xticklabels([f"[{b.lo},{b.hi})" for b in bins], rotation=45, ha="right", fontsize=7)
    ax.set_xlabel("Compilations by rank (bin)")
    ax.set_ylabel("Bin phase time / bin median phase time")
    ax.set_title(f"{cfg}: binned compilation phase timing profiles")
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    ax.legend(fontsize=6, ncol=2, loc="upper left")

    fig.tight_layout()
    plt.savefig(outpath, dpi=200)
    plt.close(fig)
    return True
