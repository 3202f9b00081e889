"""
PyGetopt
incremental command-line option scanning with GNU and POSIX semantics:
short option clusters, abbreviated long options, operand permutation.
"""
from .exceptions import (AmbiguousOptionException, ArgumentIncorrectType, GetoptError,
                         InvalidOptionFormatError, MissingArgumentException, OptionException,
                         OptionExistsError, OptionNotExistsException, OptionNotHasArgumentException,
                         OptionParseException, OptionSpecException, OutOfBoundsException)
from .getopt import Getopt, getopt, gnu_getopt
from .longopts import ArgRequirement, Flag, LongOption, parse_longopts_string
from .options import Options, ValueKind, callback, counter, flag, optional, register_converter, value
from .permute import permute_args
from .results import ClassifiedOption, EndOfOptions, Error, ErrorKind, Operand, Option
from .state import DashKind, Mode, ParseState, ScanPointer

__version__ = "0.1.0"
