"""
Exceptions raised while reading a phase timing log.

All of them are fatal: the CLI prints the message and exits.
"""


class PhaseTimesError(Exception):
    pass


class InputGrammarError(PhaseTimesError, ValueError):
    """A recognized line is missing a token it must carry."""


class NumericFormatError(PhaseTimesError, ValueError):
    """A phase time field is not a non-negative integer."""


class PathStructureError(PhaseTimesError, ValueError):
    """A path lacks the '/' needed to derive a name or strip a segment."""
