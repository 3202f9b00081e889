"""
Tests for short option clusters and values.
"""
import pytest

from PyGetopt import ArgRequirement, EndOfOptions, Error, ErrorKind, Option
from PyGetopt.shortopts import arg_requirement, spec_index


class TestSpecHelpers:
    def test_spec_index(self):
        assert spec_index("ab:c", "b") == 1
        assert spec_index("ab:c", ":") == -1
        assert spec_index("ab:c", "z") == -1
        assert spec_index("ab:c", "") == -1

    @pytest.mark.parametrize("spec,char,expected", [
        ("ab:c::", "a", ArgRequirement.NO_ARGUMENT),
        ("ab:c::", "b", ArgRequirement.REQUIRED),
        ("ab:c::", "c", ArgRequirement.OPTIONAL),
    ])
    def test_arg_requirement(self, spec, char, expected):
        assert arg_requirement(spec, spec_index(spec, char)) == expected


class TestClusters:
    def test_cluster_with_trailing_value(self, session, drain):
        args = ["-abc", "val"]
        results = drain(session, args, "abc:")
        assert results == [Option("a"), Option("b"), Option("c", "val"), EndOfOptions()]
        assert session.cursor == 2

    def test_inline_value_ends_cluster(self, session, drain):
        results = drain(session, ["-aofile", "-b"], "abo:")
        assert results == [Option("a"), Option("o", "file"), Option("b"), EndOfOptions()]

    def test_required_value_takes_next_token_even_if_option_like(self, session, drain):
        results = drain(session, ["-o", "-a"], "ao:")
        assert results == [Option("o", "-a"), EndOfOptions()]
        assert session.cursor == 2

    def test_optarg_is_exposed(self, session):
        session.parse_short(["-ovalue"], "o:")
        assert session.optarg == "value"


class TestOptionalValues:
    def test_separate_token_is_not_taken(self, session):
        args = ["-e", "arg"]
        assert session.parse_short(args, "e::") == Option("e")
        assert session.parse_short(args, "e::") == EndOfOptions()
        assert args[session.cursor:] == ["arg"]

    def test_inline_value_is_taken(self, session, drain):
        assert drain(session, ["-earg"], "e::") == [Option("e", "arg"), EndOfOptions()]


class TestErrors:
    def test_unknown_option(self, session, messages, drain):
        results = drain(session, ["-x"], "ab")
        assert results == [Error(ErrorKind.UNKNOWN_OPTION, "x"), EndOfOptions()]
        assert session.optopt == "x"
        assert messages == ["prog: unknown option -- x"]

    def test_unknown_inside_cluster_keeps_scanning(self, session, drain):
        results = drain(session, ["-axb"], "ab")
        assert results == [Option("a"), Error(ErrorKind.UNKNOWN_OPTION, "x"), Option("b"), EndOfOptions()]

    def test_colon_is_never_an_option(self, session):
        assert session.parse_short(["-:"], "a:") == Error(ErrorKind.UNKNOWN_OPTION, ":")

    def test_missing_required_value(self, session, messages):
        result = session.parse_short(["-c"], "c:")
        assert result == Error(ErrorKind.MISSING_ARGUMENT, "c", "?")
        assert session.cursor == 1
        assert messages == ["prog: option requires an argument -- c"]

    def test_leading_colon_silences_and_changes_code(self, session, messages):
        result = session.parse_short(["-c"], ":c:")
        assert result == Error(ErrorKind.MISSING_ARGUMENT, "c", ":")
        assert messages == []

    def test_opterr_off_still_reports_kind(self, session, messages):
        session.opterr = False
        assert session.parse_short(["-x"], "a") == Error(ErrorKind.UNKNOWN_OPTION, "x")
        assert messages == []

    def test_scan_resumes_after_error(self, session, drain):
        results = drain(session, ["-x", "-a"], "a")
        assert results == [Error(ErrorKind.UNKNOWN_OPTION, "x"), Option("a"), EndOfOptions()]


class TestBarePrefix:
    def test_bare_dash_is_an_operand(self, session, drain):
        args = ["-", "-a"]
        assert drain(session, args, "a") == [Option("a"), EndOfOptions()]
        assert args == ["-a", "-"]
        assert session.cursor == 1

    def test_bare_dash_listed_in_spec(self, session, drain):
        assert drain(session, ["-"], "a-") == [Option("-"), EndOfOptions()]

    def test_dash_inside_cluster_is_unknown(self, session):
        args = ["-a-b"]
        assert session.parse_short(args, "ab") == Option("a")
        assert session.parse_short(args, "ab") == Error(ErrorKind.UNKNOWN_OPTION, "-")
        assert session.parse_short(args, "ab") == Option("b")
