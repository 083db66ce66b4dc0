import numpy as np

from phase_times.binning import Bin
from phase_times.compilations import PhaseTimes
from phase_times.plot import plot_report, ratio_matrix


def _bin(lo, hi, phases):
    times = PhaseTimes(phases=list(phases), total=sum(phases))
    times.compute_median_time()
    return Bin(lo, hi, times)


def test_ratio_matrix_masks_non_finite():
    bins = [_bin(0, 1, [100, 50, 0]), _bin(1, 2, [0, 0, 9])]
    m = ratio_matrix(bins, 3)
    assert m.shape == (2, 3)
    assert np.isclose(m[0, 0], 2.0)
    assert m[0, 2] == 0.0
    assert np.isnan(m[1, 0])
    assert np.isnan(m[1, 2])


def test_plot_report_writes_png(tmp_path):
    out = tmp_path / "Base.png"
    assert plot_report(str(out), "Base", ["a", "b"], [_bin(0, 1, [3, 1]), _bin(1, 3, [6, 4])])
    assert out.stat().st_size > 0


def test_plot_report_nothing_to_draw(tmp_path):
    assert not plot_report(str(tmp_path / "x.png"), "Base", [], [])
