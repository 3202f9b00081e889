"""
diagnostics.py
human-readable error lines for scanner errors.

The scanner reports an error kind in its result; the text produced here is
only a courtesy for the user and is never needed for correct parsing.
"""
import logging
from typing import Callable, Optional

from .results import ErrorKind
from .state import DashKind, ParseState

logger = logging.getLogger(__name__)

Sink = Callable[[str], None]

ILLEGAL_CHAR = "unknown option -- {}"
REQUIRES_ARG_CHAR = "option requires an argument -- {}"
REQUIRES_ARG_STRING = "option '{}{}' requires an argument"
AMBIGUOUS = "option '{}{}' is ambiguous"
NO_ARG = "option '{}{}' doesn't allow an argument"
ILLEGAL_STRING = "unrecognized option '{}{}'"

def dash_prefix(state: ParseState) -> str:
    if state.dash_kind is DashKind.DOUBLE:
        return state.prefix_char * 2
    if state.dash_kind is DashKind.W_ESCAPE:
        return state.prefix_char + "W "
    return state.prefix_char

def short_message(kind: ErrorKind, char: str) -> str:
    if kind is ErrorKind.MISSING_ARGUMENT:
        return REQUIRES_ARG_CHAR.format(char)
    return ILLEGAL_CHAR.format(char)

def long_message(kind: ErrorKind, name: str, state: ParseState) -> str:
    template = {
        ErrorKind.MISSING_ARGUMENT: REQUIRES_ARG_STRING,
        ErrorKind.AMBIGUOUS_OPTION: AMBIGUOUS,
        ErrorKind.SPURIOUS_ARGUMENT: NO_ARG,
    }.get(kind, ILLEGAL_STRING)
    return template.format(dash_prefix(state), name)

def log_sink(line: str) -> None:
    logger.warning(line)

class Reporter:
    """Sends diagnostic lines to a sink, prefixed with the program name."""

    def __init__(self, prog: Optional[str] = None, sink: Optional[Sink] = None):
        self.prog = prog
        self.sink = sink if sink is not None else log_sink

    def emit(self, message: str) -> None:
        if self.prog:
            message = f"{self.prog}: {message}"
        self.sink(message)
