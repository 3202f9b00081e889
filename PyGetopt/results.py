"""
results.py
classified results returned by one scanner step.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

END_OF_OPTIONS = -1
IN_ORDER = 1
BAD_CHAR = '?'
BAD_ARG = ':'

class ErrorKind(Enum):
    UNKNOWN_OPTION = "unknown-option"
    AMBIGUOUS_OPTION = "ambiguous-option"
    MISSING_ARGUMENT = "missing-argument"
    SPURIOUS_ARGUMENT = "spurious-argument"
    OUT_OF_BOUNDS = "out-of-bounds"  # binding layer only

@dataclass(frozen=True)
class Option:
    """A recognised option.

    `code` is the option character for short options and the entry's `val`
    for long ones (0 when the entry wrote through its flag).
    """
    code: Union[int, str]
    value: Optional[str] = None
    long_index: Optional[int] = None
    name: Optional[str] = None

@dataclass(frozen=True)
class Operand:
    text: str

    @property
    def code(self) -> int:
        return IN_ORDER

@dataclass(frozen=True)
class EndOfOptions:
    @property
    def code(self) -> int:
        return END_OF_OPTIONS

@dataclass(frozen=True)
class Error:
    kind: ErrorKind
    offending: Union[int, str]
    code: str = BAD_CHAR

ClassifiedOption = Union[Option, Operand, EndOfOptions, Error]
