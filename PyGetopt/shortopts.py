"""
shortopts.py
scanning of single-character option clusters such as -abc or -ofile.
"""
from typing import Callable, List, Optional, Sequence

from .diagnostics import short_message
from .longopts import ArgRequirement, LongOption, resolve_long
from .results import BAD_CHAR, ClassifiedOption, EndOfOptions, Error, ErrorKind, Option
from .state import DashKind, Mode, ParseState, ScanPointer

W_ESCAPE = 'W'

def spec_index(spec: str, char: str) -> int:
    """Position of an option letter in the spec, -1 if it is not one."""
    if not char or char == ':':
        return -1
    return spec.find(char)

def arg_requirement(spec: str, index: int) -> ArgRequirement:
    if spec[index + 1:index + 2] != ':':
        return ArgRequirement.NO_ARGUMENT
    if spec[index + 2:index + 3] == ':':
        return ArgRequirement.OPTIONAL
    return ArgRequirement.REQUIRED

def _finish_token(state: ParseState, args: List[str]) -> None:
    if state.place.exhausted(args):
        state.cursor += 1
        state.place = None

def scan_short(state: ParseState, args: List[str], spec: str,
               longopts: Optional[Sequence[LongOption]], mode: Mode, badarg: str,
               warn: Callable[[str], None]) -> ClassifiedOption:
    place = state.place
    optchar = place.current(args)
    place.advance()
    index = spec_index(spec, optchar)

    if index == -1 or (optchar == state.prefix_char and not place.exhausted(args)):
        if optchar == state.prefix_char and place.exhausted(args):
            # a trailing prefix inside a cluster ends the scan
            state.place = None
            return EndOfOptions()
        _finish_token(state, args)
        warn(short_message(ErrorKind.UNKNOWN_OPTION, optchar))
        state.optopt = optchar
        return Error(ErrorKind.UNKNOWN_OPTION, optchar, BAD_CHAR)

    if longopts is not None and optchar == W_ESCAPE and spec[index + 1:index + 2] == ';':
        if place.exhausted(args):
            state.cursor += 1
            if state.cursor >= len(args):
                state.place = None
                warn(short_message(ErrorKind.MISSING_ARGUMENT, optchar))
                state.optopt = optchar
                return Error(ErrorKind.MISSING_ARGUMENT, optchar, badarg)
            state.place = ScanPointer(state.cursor)
        state.dash_kind = DashKind.W_ESCAPE
        result = resolve_long(state, args, longopts, False, mode, badarg, warn)
        state.place = None
        return result

    requirement = arg_requirement(spec, index)
    if requirement == ArgRequirement.NO_ARGUMENT:
        _finish_token(state, args)
        return Option(optchar)

    optarg = None
    if not place.exhausted(args):
        optarg = place.rest(args)
    elif requirement == ArgRequirement.REQUIRED:
        state.cursor += 1
        if state.cursor >= len(args):
            state.place = None
            warn(short_message(ErrorKind.MISSING_ARGUMENT, optchar))
            state.optopt = optchar
            return Error(ErrorKind.MISSING_ARGUMENT, optchar, badarg)
        optarg = args[state.cursor]
    state.place = None
    state.cursor += 1
    state.optarg = optarg
    return Option(optchar, optarg)
