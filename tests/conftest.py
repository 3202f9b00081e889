"""
Shared pytest fixtures for the PyGetopt tests.
"""
import pytest

from PyGetopt import EndOfOptions, Getopt


@pytest.fixture(autouse=True)
def _no_posixly_correct(monkeypatch):
    monkeypatch.delenv("POSIXLY_CORRECT", raising=False)


@pytest.fixture
def messages():
    return []


@pytest.fixture
def session(messages):
    return Getopt(prog="prog", sink=messages.append)


@pytest.fixture
def drain():
    """Run a session to the end, returning every result including the last."""

    def _drain(session, args, spec, longopts=None, long_only=False, limit=100):
        results = []
        for _ in range(limit):
            if longopts is None:
                result = session.parse_short(args, spec)
            else:
                result = session.parse_long(args, spec, longopts, long_only)
            results.append(result)
            if isinstance(result, EndOfOptions):
                return results
        raise AssertionError(f"no end of options after {limit} calls: {results}")

    return _drain
