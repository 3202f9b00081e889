"""
options.py
declarative options on top of the scanner: register options once, parse,
and read converted values back by name.

    options = Options("prog", "Does things")
    options.add_options()("o,output", "Output file", value(str), "FILE")
    options.add_options()("v,verbose", "More output", counter())
    result = options.parse(sys.argv[1:])
    result["output"], result.count("v")
"""
import enum
import logging
import re
from typing import Any, Callable, Dict, List, Optional

from .exceptions import (EXCEPTION_FOR_KIND, ArgumentIncorrectType, InvalidOptionFormatError,
                         OptionExistsError, OutOfBoundsException)
from .getopt import Getopt
from .longopts import ArgRequirement, LongOption
from .results import Error

logger = logging.getLogger(__name__)

CHAR = "char"

class ValueKind(enum.Enum):
    FLAG = "flag"
    COUNTER = "counter"
    OPTIONAL_VALUE = "optional"
    REQUIRED_VALUE = "required"
    CALLBACK = "callback"

def boolify(text: str) -> bool:
    lowered = text.lower()
    if lowered in ('1', 'y', 'yes', 'on', 'true', 'enable'):
        return True
    if lowered in ('0', 'n', 'no', 'off', 'false', 'disable'):
        return False
    raise ValueError(text)

def to_char(text: str) -> str:
    if len(text) != 1:
        raise ValueError(text)
    return text

_converters: Dict[Any, Callable[[str], Any]] = {
    str: str,
    int: lambda text: int(text, 0),
    float: float,
    bool: boolify,
    CHAR: to_char,
}

def register_converter(type_: Any, fn: Callable[[str], Any]) -> None:
    _converters[type_] = fn

def convert(type_: Any, text: str) -> Any:
    try:
        fn = _converters[type_]
    except KeyError:
        raise ArgumentIncorrectType(text) from None
    try:
        return fn(text)
    except ValueError:
        raise ArgumentIncorrectType(text) from None

class Value:
    def __init__(self, kind: ValueKind = ValueKind.REQUIRED_VALUE, type_: Any = str,
                 callback: Optional[Callable[[Any], None]] = None, container: bool = False,
                 max_count: Optional[int] = None):
        self.kind = kind
        self.type = type_
        self.callback = callback
        self.container = container
        self.max_count = max_count
        self.default = False
        self.default_value_str = ""
        self.implicit = False
        self.implicit_value_str = ""
        self.store: Any = [] if container else (0 if kind is ValueKind.COUNTER else None)

    def parse(self, text: Optional[str]) -> None:
        if self.kind is ValueKind.FLAG:
            self.store = True
        elif self.kind is ValueKind.COUNTER:
            self.store += 1
        elif self.kind is ValueKind.CALLBACK:
            self.callback(None if text is None or self.type is None else convert(self.type, text))
        elif text is None:
            if self.implicit:
                self._store(convert(self.type, self.implicit_value_str))
            else:
                self._store(None)
        else:
            self._store(convert(self.type, text))

    def _store(self, converted: Any) -> None:
        if self.container:
            self.store.append(converted)
        else:
            self.store = converted

    def parse_default(self) -> None:
        if self.kind is ValueKind.FLAG:
            self.store = boolify(self.default_value_str)
        elif self.kind is ValueKind.COUNTER:
            self.store = int(self.default_value_str, 0)
        else:
            self._store(convert(self.type, self.default_value_str))

    def has_arg(self) -> ArgRequirement:
        if self.kind in (ValueKind.FLAG, ValueKind.COUNTER):
            return ArgRequirement.NO_ARGUMENT
        if self.kind is ValueKind.CALLBACK and self.type is None:
            return ArgRequirement.NO_ARGUMENT
        if self.kind is ValueKind.OPTIONAL_VALUE:
            return ArgRequirement.OPTIONAL
        return ArgRequirement.REQUIRED

    def has_default(self) -> bool:
        return self.default

    def is_container(self) -> bool:
        return self.container

    def has_implicit(self) -> bool:
        return self.implicit

    def get_default_value(self) -> str:
        return self.default_value_str

    def get_implicit_value(self) -> str:
        return self.implicit_value_str

    def default_value(self, value: str) -> 'Value':
        self.default = True
        self.default_value_str = value
        return self

    def implicit_value(self, value: str) -> 'Value':
        self.implicit = True
        self.implicit_value_str = value
        return self

def flag() -> Value:
    return Value(ValueKind.FLAG, bool)

def counter() -> Value:
    return Value(ValueKind.COUNTER, int)

def value(type_: Any = str, container: bool = False, max_count: Optional[int] = None) -> Value:
    return Value(ValueKind.REQUIRED_VALUE, type_, container=container, max_count=max_count)

def optional(type_: Any = str, implicit: Optional[str] = None) -> Value:
    result = Value(ValueKind.OPTIONAL_VALUE, type_)
    if implicit is not None:
        result.implicit_value(implicit)
    return result

def callback(fn: Callable[[Any], None], type_: Any = None) -> Value:
    """Call `fn` on every occurrence; with a type the option takes a value."""
    return Value(ValueKind.CALLBACK, type_, callback=fn)

class OptionDetails:
    def __init__(self, name: str, description: str, value: Value):
        self.name = name
        self.description = description
        self.value = value
        self.count = 0

    def parse(self, text: Optional[str]) -> None:
        limit = self.value.max_count
        if limit is not None and self.count >= limit:
            raise OutOfBoundsException(self.name, limit)
        self.value.parse(text)
        self.count += 1

    def parse_default(self) -> None:
        self.value.parse_default()

    def has_arg(self) -> ArgRequirement:
        return self.value.has_arg()

    def get_count(self) -> int:
        return self.count

class ParseResult:
    def __init__(self, options: Dict[str, OptionDetails], unmatched: List[str]):
        self._options = options
        self.unmatched = unmatched

    def __getitem__(self, name: str) -> Any:
        return self._options[name].value.store

    def __contains__(self, name: str) -> bool:
        return name in self._options and self._options[name].get_count() > 0

    def count(self, name: str) -> int:
        return self._options[name].get_count()

class Options:
    def __init__(self, program: str, help_string: str = "", strict: bool = False):
        self.program = program
        self.help_string = help_string
        self.strict = strict
        self.options: Dict[str, OptionDetails] = {}
        self.positional: List[str] = []
        self.next_positional = 0
        self.positional_set: set = set()
        self.help_groups: Dict[str, Dict[str, Any]] = {}

    def _build_tables(self):
        # strict scans stop at the first operand
        spec = "+" if self.strict else ""
        table = []
        for key, details in self.options.items():
            requirement = details.has_arg()
            if len(key) == 1:
                spec += key + {ArgRequirement.NO_ARGUMENT: "", ArgRequirement.REQUIRED: ":",
                               ArgRequirement.OPTIONAL: "::"}[requirement]
            else:
                table.append(LongOption(key, requirement, val=key))
        return spec, table

    def _raise_for(self, error: Error) -> None:
        raise EXCEPTION_FOR_KIND[error.kind](str(error.offending))

    def parse(self, args: List[str]) -> ParseResult:
        args = list(args)
        spec, table = self._build_tables()
        session = Getopt(prog=self.program, opterr=False)
        for result in session.scan(args, spec, table):
            if isinstance(result, Error):
                self._raise_for(result)
            self.options[result.code].parse(result.value)

        unmatched = []
        for arg in args[session.cursor:]:
            if not self._consume_positional(arg):
                unmatched.append(arg)

        for opt in set(self.options.values()):
            if not opt.get_count() and opt.value.has_default():
                opt.parse_default()

        logger.debug("%s: parsed %d option(s), %d unmatched operand(s)",
                     self.program, sum(o.get_count() for o in set(self.options.values())), len(unmatched))
        return ParseResult(self.options, unmatched)

    def _consume_positional(self, arg: str) -> bool:
        while self.next_positional < len(self.positional):
            opt = self.positional[self.next_positional]
            option_details = self.options.get(opt)
            if option_details:
                if not option_details.value.is_container() and option_details.get_count() == 0:
                    option_details.parse(arg)
                    self.next_positional += 1
                    return True
                elif option_details.value.is_container():
                    option_details.parse(arg)
                    return True
            self.next_positional += 1
        return False

    def add_options(self, group: str = "") -> 'OptionAdder':
        return OptionAdder(self, group)

    def add_option(self, group: str, short: Optional[str], long: Optional[str], desc: str,
                   value: Value, arg_help: str) -> None:
        for name in (short, long):
            if name and name in self.options:
                raise OptionExistsError(name)
        option_details = OptionDetails(long or short, desc, value)
        if short:
            self.options[short] = option_details
        if long:
            self.options[long] = option_details

        if group not in self.help_groups:
            self.help_groups[group] = {"options": []}
        self.help_groups[group]["options"].append({
            "short": short,
            "long": long,
            "desc": desc,
            "has_arg": value.has_arg() != ArgRequirement.NO_ARGUMENT,
            "optional_arg": value.has_arg() == ArgRequirement.OPTIONAL,
            "has_default": value.has_default(),
            "default_value": value.get_default_value(),
            "has_implicit": value.has_implicit(),
            "implicit_value": value.get_implicit_value(),
            "arg_help": arg_help,
            "is_container": value.is_container()
        })

    def parse_positional(self, options: List[str]) -> None:
        self.positional = options
        self.next_positional = 0
        self.positional_set.update(options)

    def _option_str(self, opt: Dict[str, Any]) -> str:
        if opt["short"] and opt["long"]:
            return f"  -{opt['short']}, --{opt['long']}"
        if opt["long"]:
            return f"  --{opt['long']}"
        return f"  -{opt['short']}"

    def help_one_group(self, group: str) -> str:
        if group not in self.help_groups:
            return ""

        options = self.help_groups[group]["options"]
        longest = max(len(self._option_str(opt)) for opt in options)
        longest = min(longest, 30)
        result = f" {group} options:\n" if group else ""

        for opt in options:
            if opt["is_container"] and opt["long"] in self.positional_set:
                continue

            option_str = self._option_str(opt)
            if opt["has_arg"]:
                arg_help = opt["arg_help"] if opt["arg_help"] else "arg"
                if opt["has_implicit"]:
                    option_str += f" [={arg_help}(={opt['implicit_value']})]"
                elif opt["optional_arg"]:
                    option_str += f"[={arg_help}]"
                else:
                    option_str += f" {arg_help}"

            desc = opt["desc"]
            if opt["has_default"]:
                desc += f" (default: {opt['default_value']})"

            desc_lines = self._wrap_text(desc, longest + 2, 76 - longest - 2)
            result += option_str.ljust(longest + 2) + desc_lines[0] + "\n"
            for line in desc_lines[1:]:
                result += " " * (longest + 2) + line + "\n"

        return result

    def _wrap_text(self, text: str, indent: int, width: int) -> List[str]:
        words = text.split()
        lines = []
        current_line = ""
        for word in words:
            if current_line and len(current_line) + 1 + len(word) > width:
                lines.append(current_line)
                current_line = word
            else:
                if current_line:
                    current_line += " " + word
                else:
                    current_line = word
        lines.append(current_line)
        return lines

    def help(self, groups: Optional[List[str]] = None) -> str:
        if groups is None:
            groups = list(self.help_groups)
        result = self.help_string + "\nUsage:\n  " + self.program + " [OPTION...]"
        if self.positional:
            result += " " + " ".join(self.positional)
        result += "\n\n"

        for group in groups:
            group_help = self.help_one_group(group)
            if group_help:
                result += group_help + "\n"

        return result

OPTION_FORMAT = re.compile(r"^(?:([a-zA-Z0-9]),)?([a-zA-Z0-9][-_a-zA-Z0-9]+)$|^([a-zA-Z0-9])$")

class OptionAdder:
    def __init__(self, options: Options, group: str):
        self.options = options
        self.group = group

    def __call__(self, opts: str, desc: str, value: Optional[Value] = None, arg_help: str = "") -> 'OptionAdder':
        match = OPTION_FORMAT.match(opts)
        if not match:
            raise InvalidOptionFormatError(opts)

        short = match.group(1) or match.group(3)
        long = match.group(2)
        self.options.add_option(self.group, short, long, desc, value if value is not None else flag(), arg_help)
        return self
