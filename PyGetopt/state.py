"""
state.py
per-session scanner state and the mode flags that steer it.
"""
import enum
import logging
import os
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = '-'

class Mode(enum.Flag):
    NONE = 0
    PERMUTE = enum.auto()    # move operands behind the options
    ALL_ARGS = enum.auto()   # hand operands back in order as code 1
    LONG_ONLY = enum.auto()  # a single prefix may introduce a long name

class DashKind(enum.Enum):
    SINGLE = 1
    DOUBLE = 2
    W_ESCAPE = 3

class ScanPointer:
    """A character position inside one argument token."""

    def __init__(self, index: int, offset: int = 0):
        self.index = index
        self.offset = offset

    def current(self, args: List[str]) -> str:
        token = args[self.index]
        return token[self.offset] if self.offset < len(token) else ''

    def rest(self, args: List[str]) -> str:
        return args[self.index][self.offset:]

    def exhausted(self, args: List[str]) -> bool:
        return self.offset >= len(args[self.index])

    def advance(self, count: int = 1) -> None:
        self.offset += count

    def __repr__(self):
        return f"ScanPointer({self.index}, {self.offset})"

class ParseState:
    """Everything one option-parsing session carries between calls.

    `prefix_char` and `opterr` are caller configuration and survive reset();
    everything else belongs to the scan in progress.
    """

    def __init__(self, start: int = 0, prefix_char: str = DEFAULT_PREFIX, opterr: bool = True):
        if start < 0:
            raise ValueError(f"start index must not be negative, got {start}")
        if len(prefix_char) != 1:
            raise ValueError(f"prefix must be a single character, got {prefix_char!r}")
        self.start = start
        self.prefix_char = prefix_char
        self.opterr = opterr
        self.reset()

    def reset(self) -> None:
        self.cursor = self.start
        self.place: Optional[ScanPointer] = None
        self.needs_reset = True
        self.optarg: Optional[str] = None
        self.optopt: Union[int, str] = 0
        self.nonopt_start = -1
        self.nonopt_end = -1
        self.dash_kind = DashKind.SINGLE
        self.posixly_correct = False

    def restart(self) -> None:
        """Apply a pending reset at the top of a scanner call."""
        self.posixly_correct = os.environ.get("POSIXLY_CORRECT") is not None
        self.nonopt_start = self.nonopt_end = -1
        self.place = None
        if self.cursor == 0 and self.start > 0:
            self.cursor = self.start
        self.needs_reset = False
        logger.debug("scan restarted at %d (posixly_correct=%s)", self.cursor, self.posixly_correct)

    def snapshot(self) -> dict:
        return {
            "cursor": self.cursor,
            "place": None if self.place is None else (self.place.index, self.place.offset),
            "needs_reset": self.needs_reset,
            "optarg": self.optarg,
            "optopt": self.optopt,
            "nonopt_start": self.nonopt_start,
            "nonopt_end": self.nonopt_end,
            "dash_kind": self.dash_kind,
            "prefix_char": self.prefix_char,
            "opterr": self.opterr,
        }

def resolve_mode(spec: str, state: ParseState, base: Mode = Mode.PERMUTE, long_only: bool = False):
    """Split the mode characters off a short-option spec.

    Returns (effective spec, mode). One leading '+' or '-' is consumed; the
    next character is never read as a mode flag.
    """
    mode = base
    if long_only:
        mode |= Mode.LONG_ONLY
    if spec.startswith('-'):
        mode |= Mode.ALL_ARGS
    elif state.posixly_correct or spec.startswith('+'):
        mode &= ~Mode.PERMUTE
    if spec[:1] in ('+', '-'):
        spec = spec[1:]
    return spec, mode
