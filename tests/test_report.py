import csv
import math

from phase_times.binning import Bin, make_bins
from phase_times.compilations import PhaseTimes
from phase_times.report import (
    TOTALS_LABEL,
    bin_row,
    fmt_ratio,
    ratio,
    report_rows,
    totals_row,
    write_report,
)


def _bin(lo, hi, phases):
    times = PhaseTimes(phases=list(phases), total=sum(phases))
    times.compute_median_time()
    return Bin(lo, hi, times)


def test_ratio_zero_median():
    assert math.isnan(ratio(0, 0))
    assert ratio(5, 0) == math.inf
    assert ratio(150, 75) == 2.0


def test_fmt_ratio():
    assert fmt_ratio(2.0) == " 2.00"
    assert fmt_ratio(123.456) == "123.46"
    assert fmt_ratio(math.nan).strip() == "nan"


def test_bin_row():
    b = _bin(0, 3, [100, 50])
    assert bin_row(b, 2) == ["[0,3)", " 1.33", " 0.67", "150.00"]


def test_bin_row_zero_median_is_not_fatal():
    b = _bin(3, 4, [0, 0, 9])
    row = bin_row(b, 3)
    assert row[1].strip() == "nan"
    assert row[3].strip() == "inf"


def test_totals_row():
    bins = [_bin(0, 1, [1, 2]), _bin(1, 2, [10, 20])]
    assert totals_row(bins, 2) == [TOTALS_LABEL, "11", "22", "33"]


def test_report_rows_shape():
    rows = report_rows("Base", ["a", "b"], [_bin(0, 1, [1, 2])])
    assert rows[0][0].startswith("Base:Binned compilation phase timing profiles")
    assert rows[0][1:] == ["a", "b", "TOTAL (ns)"]
    assert len(rows) == 3
    assert rows[-1][0] == TOTALS_LABEL


def test_write_report(tmp_path):
    samples = []
    for t in range(1, 5):
        rec = PhaseTimes.sized(2)
        rec.set_time(0, t)
        rec.set_time(1, 2 * t)
        rec.compute_median_time()
        samples.append(rec)
    bins = make_bins(samples, 2, 2)
    out = tmp_path / "sub" / "Base.csv"
    write_report(str(out), "Base", ["p0", "p1"], bins)

    with out.open(newline="") as f:
        rows = list(csv.reader(f))
    assert [r[0] for r in rows[1:-1]] == ["[0,2)", "[2,4)"]
    assert rows[-1] == [TOTALS_LABEL, "10", "20", "30"]
    assert b"\r\n" not in out.read_bytes()
