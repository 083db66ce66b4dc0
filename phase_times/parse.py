"""
Scrape compiler phase timings out of a benchmark build log.

Three line shapes carry meaning, checked in this order; everything else is
ignored:

  (cd <PWD>; ... GOPATH=<GOPATH> ... GOROOT=<ROOTS>/<CONFIG>/ ... -gcflags=all=-d=ssa/all/time=1 . )
  # <PACKAGE>
  <PATH>:<line>:<column>:<tab><PHASE><tab>TIME(ns)<tab><TIME><tab><FUNC-OR-METHOD>

Timings are collected per configuration as
  <CONFIG> : (<PACKAGE>, <NORMALIZED-PATH>, <FUNC-OR-METHOD>) : <PHASE> : <TIME>
"""

import re
from collections import OrderedDict
from typing import Dict, Iterable, Optional

from .compilations import CompilationKey, Configuration
from .errors import InputGrammarError, NumericFormatError, PathStructureError
from .strings import InternTable, PhaseIndex

# ============================================================
# Line markers
# ============================================================

HEADER_MARKER = "gcflags=all=-d=ssa/all/time=1"
PACKAGE_PREFIX = "# "
TIMING_MARKER = "TIME(ns)"

CD_PREFIX = "(cd "
GOPATH_PREFIX = "GOPATH="
GOROOT_PREFIX = "GOROOT="

_TIME_RE = re.compile(r"[0-9]+")


def extract_prefixed(line: str, prefix: str) -> str:
    """
    Return the space-terminated word right after `prefix` in `line`.
    One trailing ';' and then one trailing '/' are dropped.
    """
    i = line.find(prefix)
    if i < 0:
        raise InputGrammarError(f"compile line is missing {prefix!r} prefixed string, line = {line!r}")
    rest = line[i + len(prefix):]
    j = rest.find(" ")
    if j < 0:
        raise InputGrammarError(f"{prefix!r} value is not followed by a space, line = {line!r}")
    word = rest[:j]
    if word.endswith(";"):
        word = word[:-1]
    if word.endswith("/"):
        word = word[:-1]
    if not word:
        raise InputGrammarError(f"{prefix!r} value is empty, line = {line!r}")
    return word


def config_name(goroot: str) -> str:
    i = goroot.rfind("/")
    if i < 0:
        raise PathStructureError(f"GOROOT lacks trailing configuration: {goroot}")
    return goroot[i + 1:]


def normalize_locator(locator: str, pwd: str, gopath: str, goroot: str) -> str:
    """
    Resolve leading '../' against pwd, then shorten paths under GOPATH or
    GOROOT to 'GOPATH/...' or 'GOROOT/...'.
    """
    original = locator
    if locator.startswith("../"):
        prefix = pwd
        while locator.startswith("../"):
            locator = locator[3:]
            i = prefix.rfind("/")
            if i < 0:
                raise PathStructureError(
                    f"../ removal ran out of path, originals were {original} and {pwd}"
                )
            prefix = prefix[:i]
        locator = prefix + "/" + locator
    if locator.startswith(gopath):
        locator = "GOPATH/" + locator[len(gopath) + 1:]
    elif locator.startswith(goroot):
        locator = "GOROOT/" + locator[len(goroot) + 1:]
    return locator


def parse_time(field: str) -> int:
    if not _TIME_RE.fullmatch(field):
        raise NumericFormatError(f"phase time was not an integer: {field!r}")
    return int(field)


class PhaseLog:
    """
    Parser state plus everything collected from one pass over a log.

    `configs` keeps configurations in first-seen order; phase ids are shared
    across all of them so report columns line up.
    """

    def __init__(self, interns: Optional[InternTable] = None, phases: Optional[PhaseIndex] = None) -> None:
        self.interns = interns if interns is not None else InternTable()
        self.phases = phases if phases is not None else PhaseIndex()
        self.configs: Dict[str, Configuration] = OrderedDict()

        self.cfg: Optional[Configuration] = None
        self.pkg = "UNSET_PACKAGE"
        self.gopath = "UNSET_GOPATH"
        self.goroot = "UNSET_GOROOT"
        self.pwd = "UNSET_PWD"

        self.lineno = 0
        self.timing_lines = 0

    # ----------------------------
    # Line shapes
    # ----------------------------

    def _header(self, line: str) -> None:
        intern = self.interns.intern
        self.pwd = intern(extract_prefixed(line, CD_PREFIX))
        self.gopath = intern(extract_prefixed(line, GOPATH_PREFIX))
        self.goroot = intern(extract_prefixed(line, GOROOT_PREFIX))
        name = intern(config_name(self.goroot))
        cfg = self.configs.get(name)
        if cfg is None:
            cfg = Configuration(name)
            self.configs[name] = cfg
        self.cfg = cfg

    def _timing(self, line: str) -> None:
        fields = [s.strip() for s in line.split("\t")]
        if len(fields) < 5:
            raise InputGrammarError(f"timing line has {len(fields)} tab-separated fields, expected 5: {line!r}")
        if self.cfg is None:
            raise InputGrammarError(f"timing line before any configuration header: {line!r}")

        intern = self.interns.intern
        phase = self.phases.index(intern(fields[1]))
        func_or_method = intern(fields[4])
        path_lc = intern(normalize_locator(fields[0], self.pwd, self.gopath, self.goroot))
        time_ns = parse_time(fields[3])

        key = CompilationKey(self.pkg, path_lc, func_or_method)
        self.cfg.add_time(key, phase, time_ns, self.phases.next_index())
        self.timing_lines += 1

    def feed(self, line: str) -> None:
        self.lineno += 1
        line = line.rstrip("\r\n")
        try:
            if HEADER_MARKER in line:
                self._header(line)
            elif line.startswith(PACKAGE_PREFIX):
                self.pkg = self.interns.intern(line[len(PACKAGE_PREFIX):].strip())
            elif TIMING_MARKER in line:
                self._timing(line)
        except (InputGrammarError, NumericFormatError, PathStructureError) as e:
            raise type(e)(f"line {self.lineno}: {e}") from None

    def compute_medians(self) -> None:
        for cfg in self.configs.values():
            cfg.compute_medians()


def parse_lines(lines: Iterable[str], interns: Optional[InternTable] = None,
                phases: Optional[PhaseIndex] = None) -> PhaseLog:
    """Consume every line, then freeze each record's median."""
    log = PhaseLog(interns, phases)
    for line in lines:
        log.feed(line)
    log.compute_medians()
    return log
