"""
Tests for the declarative option layer.
"""
import pytest

from PyGetopt import (AmbiguousOptionException, ArgumentIncorrectType, ErrorKind, InvalidOptionFormatError,
                      MissingArgumentException, OptionExistsError, OptionNotExistsException,
                      OptionNotHasArgumentException, Options, OutOfBoundsException, ValueKind, callback,
                      counter, flag, optional, register_converter, value)
from PyGetopt.options import CHAR, convert


@pytest.fixture
def options():
    options = Options("prog", "A test program")
    options.add_options()("o,output", "Output file", value(str), "FILE")
    options.add_options()("v,verbose", "More output", counter())
    options.add_options()("n,number", "How many", value(int).default_value("5"))
    options.add_options()("q,quiet", "Less output")
    return options


class TestParse:
    def test_values_and_operands(self, options):
        result = options.parse(["-vv", "--output", "f.txt", "in", "-n", "0x10", "--verb"])
        assert result["output"] == "f.txt"
        assert result["o"] == "f.txt"
        assert result["verbose"] == 3
        assert result.count("v") == 3
        assert result["number"] == 16
        assert result.unmatched == ["in"]

    def test_defaults_and_flags(self, options):
        result = options.parse(["-q"])
        assert result["number"] == 5
        assert result["quiet"] is True
        assert "quiet" in result
        assert "output" not in result
        assert result["verbose"] == 0

    def test_positional(self):
        options = Options("prog")
        options.add_options()("input", "Input file", value(str))
        options.add_options()("rest", "Everything else", value(str, container=True))
        options.parse_positional(["input", "rest"])
        result = options.parse(["a.txt", "b", "c"])
        assert result["input"] == "a.txt"
        assert result["rest"] == ["b", "c"]
        assert result.unmatched == []

    def test_strict_ordering(self):
        options = Options("prog", strict=True)
        options.add_options()("a,all", "All")
        result = options.parse(["x", "-a"])
        assert "all" not in result
        assert result.unmatched == ["x", "-a"]

    def test_optional_value_with_implicit(self):
        options = Options("prog")
        options.add_options()("color", "Colourise", optional(str, implicit="auto"))
        assert options.parse(["--color"])["color"] == "auto"

        options = Options("prog")
        options.add_options()("color", "Colourise", optional(str, implicit="auto"))
        assert options.parse(["--color=never"])["color"] == "never"

    def test_callbacks(self):
        calls = []
        options = Options("prog")
        options.add_options()("p,ping", "Ping", callback(calls.append))
        options.add_options()("level", "Level", callback(calls.append, int))
        options.parse(["-p", "--level=3", "-p"])
        assert calls == [None, 3, None]

    def test_char_values(self):
        options = Options("prog")
        options.add_options()("d,delimiter", "Field delimiter", value(CHAR))
        assert options.parse(["-d,"])["delimiter"] == ","


class TestParseErrors:
    def test_unknown(self, options):
        with pytest.raises(OptionNotExistsException) as info:
            options.parse(["--nope"])
        assert info.value.kind is ErrorKind.UNKNOWN_OPTION

    def test_missing_argument(self, options):
        with pytest.raises(MissingArgumentException):
            options.parse(["-o"])

    def test_spurious_argument(self, options):
        with pytest.raises(OptionNotHasArgumentException):
            options.parse(["--verbose=2"])

    def test_ambiguous(self):
        options = Options("prog")
        options.add_options()("verbose", "More")("version", "Show version")
        with pytest.raises(AmbiguousOptionException):
            options.parse(["--ver"])

    def test_bad_value(self, options):
        with pytest.raises(ArgumentIncorrectType):
            options.parse(["-n", "many"])

    def test_repeat_limit(self):
        options = Options("prog")
        options.add_options()("I,include", "Include dir", value(str, container=True, max_count=2))
        assert options.parse(["-Ia", "-Ib"])["include"] == ["a", "b"]

        options = Options("prog")
        options.add_options()("I,include", "Include dir", value(str, container=True, max_count=2))
        with pytest.raises(OutOfBoundsException) as info:
            options.parse(["-Ia", "-Ib", "-Ic"])
        assert info.value.kind is ErrorKind.OUT_OF_BOUNDS


class TestRegistration:
    def test_duplicate(self, options):
        with pytest.raises(OptionExistsError):
            options.add_options()("o,other", "Clashes on -o")

    @pytest.mark.parametrize("spec", ["-x", "x,", "ab,long", ""])
    def test_bad_format(self, options, spec):
        with pytest.raises(InvalidOptionFormatError):
            options.add_options()(spec, "Bad")

    def test_short_only(self):
        options = Options("prog")
        options.add_options()("x", "Short only")
        assert "x" in options.parse(["-x"])

    def test_value_kinds(self):
        assert flag().kind is ValueKind.FLAG
        assert counter().kind is ValueKind.COUNTER
        assert value().kind is ValueKind.REQUIRED_VALUE
        assert optional().kind is ValueKind.OPTIONAL_VALUE
        assert callback(print).kind is ValueKind.CALLBACK


class TestConverters:
    def test_builtin(self):
        assert convert(int, "0o17") == 15
        assert convert(float, "2.5") == 2.5
        assert convert(bool, "off") is False
        assert convert(CHAR, "x") == "x"

    def test_rejects(self):
        with pytest.raises(ArgumentIncorrectType):
            convert(CHAR, "xy")
        with pytest.raises(ArgumentIncorrectType):
            convert(complex, "1j")

    def test_register(self):
        register_converter("csv", lambda text: text.split(","))
        options = Options("prog")
        options.add_options()("f,fields", "Fields", value("csv"))
        assert options.parse(["-f", "a,b"])["fields"] == ["a", "b"]


class TestHelp:
    def test_lists_options(self, options):
        text = options.help()
        assert text.startswith("A test program\nUsage:\n  prog [OPTION...]")
        assert "  -o, --output FILE" in text
        assert "(default: 5)" in text
        assert "  -q, --quiet" in text

    def test_optional_value_marker(self):
        options = Options("prog")
        options.add_options("Output")("color", "Colourise", optional(str, implicit="auto"), "WHEN")
        text = options.help(["Output"])
        assert " Output options:" in text
        assert "--color [=WHEN(=auto)]" in text
