from typing import Dict, List


class InternTable:
    """
    Keeps one canonical instance of each repeated string
    (paths, phase names, function names).
    """

    def __init__(self) -> None:
        self._strings: Dict[str, str] = {}

    def intern(self, s: str) -> str:
        r = self._strings.get(s)
        if r is None:
            self._strings[s] = s
            r = s
        return r


class PhaseIndex:
    """
    Dense ids for phase names, in first-seen order.
    Ids are never reused; their order is the column order of every report.
    """

    def __init__(self) -> None:
        self._ids: Dict[str, int] = {}
        self._names: List[str] = []

    def index(self, name: str) -> int:
        i = self._ids.get(name)
        if i is None:
            i = len(self._names)
            self._ids[name] = i
            self._names.append(name)
        return i

    def names(self) -> List[str]:
        return list(self._names)

    def next_index(self) -> int:
        return len(self._names)

    def __len__(self) -> int:
        return len(self._names)
