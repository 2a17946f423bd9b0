"""
Fixtures shared by the testsieve tests.
"""

import io

import msgspec
import pytest

from testsieve.escapes import ESCAPES, Escapes


class FirstChoice:
    """
    Stands in for random.Random where the tests need to know what gets picked.
    """
    def choice(self, seq):
        return seq[0]


def json_line(action: str, package: str = '', test: str = '', output: str = '') -> str:
    """
    One line of go test -json output.
    """
    fields = { 'Action' : action }
    if package:
        fields['Package'] = package
    if test:
        fields['Test'] = test
    if output:
        fields['Output'] = output
    return msgspec.json.encode(fields).decode('utf-8')


@pytest.fixture
def esc() -> Escapes:
    return ESCAPES['test']


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def diagnostics() -> io.StringIO:
    return io.StringIO()
