"""
getopt.py
the option-parsing session: decides, one call at a time, what the next
argument token is and hands back a classified result.

A session owns its ParseState, so any number of parses can run side by
side. Reset a session (or make a new one) before scanning a different
argument list.
"""
import logging
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .diagnostics import Reporter, Sink
from .exceptions import GetoptError
from .longopts import ArgRequirement, LongOption, resolve_long
from .permute import permute_args
from .results import BAD_ARG, BAD_CHAR, ClassifiedOption, EndOfOptions, Error, Operand
from .shortopts import scan_short, spec_index
from .state import DEFAULT_PREFIX, DashKind, Mode, ParseState, ScanPointer, resolve_mode

logger = logging.getLogger(__name__)

def _quiet(message: str) -> None:
    pass

class Getopt:
    def __init__(self, start: int = 0, prog: Optional[str] = None, sink: Optional[Sink] = None,
                 prefix_char: str = DEFAULT_PREFIX, opterr: bool = True):
        self.state = ParseState(start, prefix_char, opterr)
        self.reporter = Reporter(prog, sink)

    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def optarg(self) -> Optional[str]:
        return self.state.optarg

    @property
    def optopt(self):
        return self.state.optopt

    @property
    def prefix_char(self) -> str:
        return self.state.prefix_char

    @prefix_char.setter
    def prefix_char(self, char: str) -> None:
        if len(char) != 1:
            raise ValueError(f"prefix must be a single character, got {char!r}")
        self.state.prefix_char = char

    @property
    def opterr(self) -> bool:
        return self.state.opterr

    @opterr.setter
    def opterr(self, enabled: bool) -> None:
        self.state.opterr = enabled

    def reset(self) -> None:
        self.state.reset()
        logger.debug("session reset")

    def parse_short(self, args: List[str], spec: Optional[str]) -> ClassifiedOption:
        """One step over short options only."""
        if not spec:
            return EndOfOptions()
        return self._next(args, spec, None, False)

    def parse_long(self, args: List[str], spec: Optional[str], longopts: Sequence[LongOption],
                   permit_long_only: bool = False) -> ClassifiedOption:
        """One step over short and long options.

        With `permit_long_only` a single prefix character may introduce a
        long name; a one-letter name that is also a short option is still
        scanned as a short option.
        """
        if spec is None or (not spec and not longopts):
            return EndOfOptions()
        return self._next(args, spec, longopts or (), permit_long_only)

    def scan(self, args: List[str], spec: Optional[str], longopts: Optional[Sequence[LongOption]] = None,
             long_only: bool = False) -> Iterator[ClassifiedOption]:
        """Yield results until the end of the options."""
        while True:
            if longopts is None:
                result = self.parse_short(args, spec)
            else:
                result = self.parse_long(args, spec, longopts, long_only)
            if isinstance(result, EndOfOptions):
                return
            yield result

    def _next(self, args: List[str], spec: str, longopts: Optional[Sequence[LongOption]],
              long_only: bool) -> ClassifiedOption:
        if not isinstance(args, list):
            raise TypeError(f"arguments must be a list, got {type(args).__name__}")
        state = self.state

        if state.cursor == 0 and state.start > 0:
            state.needs_reset = True
        if state.needs_reset:
            state.restart()

        spec, mode = resolve_mode(spec, state, Mode.PERMUTE, long_only)
        silent = spec.startswith(':')
        badarg = BAD_ARG if silent else BAD_CHAR
        warn = self.reporter.emit if state.opterr and not silent else _quiet
        state.optarg = None

        fresh = state.place is None
        if fresh:
            result = self._next_token(args, spec, mode)
            if result is not None:
                return result

        place = state.place
        prefix = state.prefix_char
        if longopts is not None and place.offset > 0 and (
                (fresh and place.current(args) == prefix) or Mode.LONG_ONLY in mode):
            short_too = False
            state.dash_kind = DashKind.SINGLE
            if fresh and place.current(args) == prefix:
                place.advance()
                state.dash_kind = DashKind.DOUBLE
            elif spec_index(spec, place.current(args)) != -1:
                short_too = True
            result = resolve_long(state, args, longopts, short_too, mode, badarg, warn)
            if result is not None:
                state.place = None
                return self._settle(args, result)

        return self._settle(args, scan_short(state, args, spec, longopts, mode, badarg, warn))

    def _close_run(self, args: List[str], end: int) -> int:
        """Move a closed operand run behind the tokens up to `end`; returns its length."""
        state = self.state
        length = state.nonopt_end - state.nonopt_start
        permute_args(args, state.nonopt_start, state.nonopt_end, end)
        state.cursor -= length
        state.nonopt_start = state.nonopt_end = -1
        return length

    def _settle(self, args: List[str], result: ClassifiedOption) -> ClassifiedOption:
        """Permute the run an option token closed before handing back its result."""
        state = self.state
        if state.nonopt_end != -1:
            # a cluster still being scanned moves with the options
            end = state.cursor if state.place is None else state.cursor + 1
            length = self._close_run(args, end)
            if state.place is not None:
                state.place.index -= length
        return result

    def _next_token(self, args: List[str], spec: str, mode: Mode) -> Optional[ClassifiedOption]:
        """Find the next token worth scanning.

        Returns a result when the token settles the call on its own (end of
        input, an in-order operand, `--`), or None with the scan pointer set
        on an option token.
        """
        state = self.state
        prefix = state.prefix_char
        while True:
            if state.cursor >= len(args):
                state.place = None
                if state.nonopt_start != -1:
                    state.cursor = state.nonopt_start
                state.nonopt_start = state.nonopt_end = -1
                return EndOfOptions()

            token = args[state.cursor]
            if not token.startswith(prefix) or (len(token) == 1 and prefix not in spec):
                if Mode.ALL_ARGS in mode:
                    state.optarg = token
                    state.cursor += 1
                    return Operand(token)
                if Mode.PERMUTE not in mode:
                    return EndOfOptions()
                if state.nonopt_start == -1:
                    state.nonopt_start = state.cursor
                state.cursor += 1
                continue

            if state.nonopt_start != -1 and state.nonopt_end == -1:
                state.nonopt_end = state.cursor

            if token == prefix * 2:
                state.cursor += 1
                if state.nonopt_end != -1:
                    self._close_run(args, state.cursor)
                state.nonopt_start = state.nonopt_end = -1
                return EndOfOptions()

            state.place = ScanPointer(state.cursor, 1 if len(token) > 1 else 0)
            return None

def _as_long_table(longopts) -> List[LongOption]:
    """Accept LongOption entries or standard-library style names ('name=' takes a value)."""
    if isinstance(longopts, str):
        longopts = [longopts]
    table = []
    for item in longopts:
        if isinstance(item, LongOption):
            table.append(item)
        elif item.endswith('=?'):
            table.append(LongOption(item[:-2], ArgRequirement.OPTIONAL, val=item[:-2]))
        elif item.endswith('='):
            table.append(LongOption(item[:-1], ArgRequirement.REQUIRED, val=item[:-1]))
        else:
            table.append(LongOption(item, val=item))
    return table

def _collect(args, shortopts: str, longopts) -> Tuple[List[Tuple[str, str]], List[str]]:
    args = list(args)
    table = _as_long_table(longopts)
    messages = []
    session = Getopt(sink=messages.append)
    prefix = session.prefix_char
    opts = []
    operands = []
    while True:
        # unlike parse_long(), an empty option string still rejects options
        result = session._next(args, shortopts, table, False)
        if isinstance(result, EndOfOptions):
            break
        if isinstance(result, Error):
            msg = messages[-1] if messages else f"option {result.offending}: {result.kind.value}"
            raise GetoptError(msg, str(result.offending), result.kind)
        if isinstance(result, Operand):
            operands.append(result.text)
        elif result.name is not None:
            opts.append((prefix * 2 + result.name, result.value or ''))
        else:
            opts.append((prefix + result.code, result.value or ''))
    return opts, operands + args[session.cursor:]

def getopt(args, shortopts: str, longopts: Union[str, Sequence] = ()):
    """getopt(args, options[, long_options]) -> opts, args

    Stops at the first operand, the way POSIX getopt() does. Each option is
    returned as ('-x', value) or ('--name', value), value '' when absent.
    """
    return _collect(args, '+' + shortopts.lstrip('+-'), longopts)

def gnu_getopt(args, shortopts: str, longopts: Union[str, Sequence] = ()):
    """Like getopt(), but options and operands may be intermixed.

    A leading '+' in shortopts, or POSIXLY_CORRECT in the environment,
    restores strict ordering; a leading '-' returns operands in place.
    """
    return _collect(args, shortopts, longopts)
