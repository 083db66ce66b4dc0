"""
Per-compilation phase time records.

A compilation is one compiled function or method, identified by
(package, normalized path:line:col, function-or-method).
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple


class CompilationKey(NamedTuple):
    pkg: str
    path_lc: str
    func_or_method: str


def median_of(phases: List[int]) -> int:
    """
    Median over the whole phase vector, unset (zero) slots included.

    For even length the two central values are averaged with integer
    division, so {x, y} -> (x + y) // 2. Small compilations that touch
    few phases therefore often get a median of 0.
    """
    n = len(phases)
    if n == 0:
        return 0
    scratch = sorted(phases)
    return (scratch[n // 2] + scratch[(n - 1) // 2]) // 2


@dataclass
class PhaseTimes:
    """
    Phase times indexed by phase id, plus their running total.
    Also used as the shape of an aggregated bin.
    """
    phases: List[int] = field(default_factory=list)
    total: int = 0
    median: int = 0

    @classmethod
    def sized(cls, n_phases: int) -> "PhaseTimes":
        return cls(phases=[0] * n_phases)

    def grow(self, n_phases: int) -> None:
        if len(self.phases) < n_phases:
            self.phases.extend([0] * (n_phases - len(self.phases)))

    def set_time(self, phase: int, time_ns: int) -> None:
        # First nonzero write wins; zero never marks a slot as set.
        if time_ns == 0:
            return
        self.grow(phase + 1)
        if self.phases[phase] != 0:
            return
        self.phases[phase] = time_ns
        self.total += time_ns

    def compute_median_time(self) -> int:
        self.median = median_of(self.phases)
        return self.median


class Configuration:
    """All compilation records seen under one build configuration."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.compilations: dict = {}

    def record(self, key: CompilationKey, n_phases: int) -> PhaseTimes:
        rec = self.compilations.get(key)
        if rec is None:
            rec = PhaseTimes.sized(n_phases)
            self.compilations[key] = rec
        return rec

    def add_time(self, key: CompilationKey, phase: int, time_ns: int, n_phases: int) -> None:
        self.record(key, n_phases).set_time(phase, time_ns)

    def compute_medians(self) -> None:
        for rec in self.compilations.values():
            rec.compute_median_time()

    def samples(self) -> List[PhaseTimes]:
        return list(self.compilations.values())

    def __len__(self) -> int:
        return len(self.compilations)
