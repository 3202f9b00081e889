from typing import Optional

from .results import ErrorKind

class OptionException(Exception):
    kind: Optional[ErrorKind] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message

class OptionSpecException(OptionException):
    pass

class OptionParseException(OptionException):
    pass

class OptionExistsError(OptionSpecException):
    def __init__(self, option: str):
        super().__init__(f"Option '{option}' already exists")

class InvalidOptionFormatError(OptionSpecException):
    def __init__(self, format: str):
        super().__init__(f"Invalid option format '{format}'")

class OptionNotExistsException(OptionParseException):
    kind = ErrorKind.UNKNOWN_OPTION

    def __init__(self, option: str):
        super().__init__(f"Option '{option}' does not exist")

class AmbiguousOptionException(OptionParseException):
    kind = ErrorKind.AMBIGUOUS_OPTION

    def __init__(self, option: str):
        super().__init__(f"Option '{option}' is ambiguous")

class MissingArgumentException(OptionParseException):
    kind = ErrorKind.MISSING_ARGUMENT

    def __init__(self, option: str):
        super().__init__(f"Option '{option}' is missing an argument")

class OptionNotHasArgumentException(OptionParseException):
    kind = ErrorKind.SPURIOUS_ARGUMENT

    def __init__(self, option: str, arg: Optional[str] = None):
        if arg is None:
            super().__init__(f"Option '{option}' does not take an argument")
        else:
            super().__init__(f"Option '{option}' does not take an argument, but argument '{arg}' given")

class OutOfBoundsException(OptionParseException):
    kind = ErrorKind.OUT_OF_BOUNDS

    def __init__(self, option: str, limit: int):
        super().__init__(f"Option '{option}' given more than {limit} time(s)")

class ArgumentIncorrectType(OptionParseException):
    def __init__(self, arg: str):
        super().__init__(f"Argument '{arg}' failed to parse")

class GetoptError(OptionParseException):
    """Raised by the list-style helpers; `opt` names the offending option."""

    def __init__(self, msg: str, opt: str = '', kind: Optional[ErrorKind] = None):
        super().__init__(msg)
        self.msg = msg
        self.opt = opt
        self.kind = kind

EXCEPTION_FOR_KIND = {
    ErrorKind.UNKNOWN_OPTION: OptionNotExistsException,
    ErrorKind.AMBIGUOUS_OPTION: AmbiguousOptionException,
    ErrorKind.MISSING_ARGUMENT: MissingArgumentException,
    ErrorKind.SPURIOUS_ARGUMENT: OptionNotHasArgumentException,
}
