"""
longopts.py
long option table entries and the prefix-matching resolver.
"""
import enum
from typing import Any, Callable, List, Optional, Sequence, Union

from .diagnostics import long_message
from .results import BAD_CHAR, ClassifiedOption, Error, ErrorKind, Option
from .state import Mode, ParseState

class ArgRequirement(enum.IntEnum):
    NO_ARGUMENT = 0
    REQUIRED = 1
    OPTIONAL = 2

class Flag:
    """Write target for a long option; a match stores the entry's val here."""

    def __init__(self, value: Any = 0):
        self.value = value

    def __repr__(self):
        return f"Flag({self.value!r})"

class LongOption:
    def __init__(self, name: str, has_arg: ArgRequirement = ArgRequirement.NO_ARGUMENT,
                 flag: Optional[Flag] = None, val: Union[int, str] = 0):
        if not name:
            raise ValueError("long option name must not be empty")
        self.name = name
        self.has_arg = ArgRequirement(has_arg)
        self.flag = flag
        self.val = val

    def same_behaviour(self, other: 'LongOption') -> bool:
        return (self.has_arg == other.has_arg
                and self.flag is other.flag
                and self.val == other.val)

    def __repr__(self):
        return f"LongOption({self.name!r}, {self.has_arg.name}, flag={self.flag!r}, val={self.val!r})"

def parse_longopts_string(text: str, sep: str = ',') -> List[LongOption]:
    """Build a table from 'name,name:,name::' notation; each entry's val is its name."""
    table = []
    for item in text.split(sep):
        item = item.strip()
        if not item:
            continue
        if item.endswith('::'):
            table.append(LongOption(item[:-2], ArgRequirement.OPTIONAL, val=item[:-2]))
        elif item.endswith(':'):
            table.append(LongOption(item[:-1], ArgRequirement.REQUIRED, val=item[:-1]))
        else:
            table.append(LongOption(item, val=item))
    return table

def find_match(candidate: str, longopts: Sequence[LongOption], short_too: bool, long_only: bool):
    """Return (index, ambiguous) for `candidate` against the table.

    An exact match ends the search. Two partial matches only count as
    ambiguous when their entries behave differently, or in long-only mode.
    """
    match = -1
    second_partial = False
    for i, entry in enumerate(longopts):
        if not entry.name.startswith(candidate):
            continue
        if len(entry.name) == len(candidate):
            return i, False
        # a known short option never partially matches a long name
        if short_too and len(candidate) == 1:
            continue
        if match == -1:
            match = i
        elif long_only or not entry.same_behaviour(longopts[match]):
            second_partial = True
    return match, second_partial

def resolve_long(state: ParseState, args: List[str], longopts: Sequence[LongOption],
                 short_too: bool, mode: Mode, badarg: str,
                 warn: Callable[[str], None]) -> Optional[ClassifiedOption]:
    """Resolve the long name at the scan pointer and consume its token.

    Returns None when `short_too` is set and nothing matched, with the cursor
    left on the token so the short scanner can take over.
    """
    current = state.place.rest(args)
    state.cursor += 1

    name, eq, inline = current.partition('=')
    has_equal = inline if eq else None

    match, ambiguous = find_match(name, longopts, short_too, Mode.LONG_ONLY in mode)

    if match != -1 and ambiguous:
        warn(long_message(ErrorKind.AMBIGUOUS_OPTION, name, state))
        state.optopt = 0
        return Error(ErrorKind.AMBIGUOUS_OPTION, name, BAD_CHAR)

    if match == -1:
        if short_too:
            state.cursor -= 1
            return None
        warn(long_message(ErrorKind.UNKNOWN_OPTION, current, state))
        state.optopt = 0
        return Error(ErrorKind.UNKNOWN_OPTION, name, BAD_CHAR)

    entry = longopts[match]
    blame = entry.val if entry.flag is None else 0

    if entry.has_arg == ArgRequirement.NO_ARGUMENT and has_equal is not None:
        warn(long_message(ErrorKind.SPURIOUS_ARGUMENT, name, state))
        state.optopt = blame
        return Error(ErrorKind.SPURIOUS_ARGUMENT, entry.name, badarg)

    optarg = None
    if entry.has_arg != ArgRequirement.NO_ARGUMENT:
        if has_equal is not None:
            optarg = has_equal
        elif entry.has_arg == ArgRequirement.REQUIRED and state.cursor < len(args):
            # an optional value is never taken from the next token
            optarg = args[state.cursor]
            state.cursor += 1

    if entry.has_arg == ArgRequirement.REQUIRED and optarg is None:
        warn(long_message(ErrorKind.MISSING_ARGUMENT, current, state))
        state.optopt = blame
        return Error(ErrorKind.MISSING_ARGUMENT, entry.name, badarg)

    state.optarg = optarg
    if entry.flag is not None:
        entry.flag.value = entry.val
        return Option(0, optarg, long_index=match, name=entry.name)
    return Option(entry.val, optarg, long_index=match, name=entry.name)
