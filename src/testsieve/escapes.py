"""
Terminal escape sequences, resolved once per run into an immutable Escapes object
that is handed to whichever progress reporter is active.
"""

from abc import ABC, abstractmethod
import os
from typing import Mapping

from testsieve.reporting import trace, warning

ESC_ENV_VAR = 'TESTSIEVE_ESC'


class Escapes(ABC):
    """
    How to decorate text: colours for the four outcomes, plus 24-bit colour,
    hyperlinks and emphasis where the terminal supports them.
    """
    name = ''
    fail = ''
    passed = ''
    skip = ''
    zero = ''
    nope = ''
    endc = ''


    @abstractmethod
    def rgb(self, colour: tuple[int,int,int]) -> str:
        ...


    @abstractmethod
    def uri(self, url: str, text: str) -> str:
        ...


    @abstractmethod
    def em(self, text: str) -> str:
        ...


    def __repr__(self):
        return f'{ type(self).__name__ }()'


def _osc8_link(url: str, text: str) -> str:
    return f'\033]8;;{ url }\033\\{ text }\033]8;;\033\\'


def _italic(text: str) -> str:
    return f'\033[3m{ text }\033[23m'


class FullEscapes(Escapes):
    """
    256-colour outcomes and truecolor ratios.
    """
    name = 'full'
    fail = '\033[38;5;124m'
    passed = '\033[38;5;034m'
    skip = '\033[38;5;244m'
    zero = '\033[38;5;172m'
    nope = '\033[00000000m' # same length as the others, so tables line up
    endc = '\033[0m'

    def rgb(self, colour: tuple[int,int,int]) -> str:
        return f'\033[38;2;{ colour[0] };{ colour[1] };{ colour[2] }m'

    def uri(self, url: str, text: str) -> str:
        return _osc8_link(url, text)

    def em(self, text: str) -> str:
        return _italic(text)


class MonoEscapes(Escapes):
    """
    No colour, but the usual text attributes.
    """
    name = 'mono'
    fail = '\033[7m' # reversed
    passed = '\033[1m' # bold
    skip = '\033[2m' # dim
    zero = '\033[1m'
    nope = '\033[0m'
    endc = '\033[0m'

    def rgb(self, colour: tuple[int,int,int]) -> str:
        return ''

    def uri(self, url: str, text: str) -> str:
        return _osc8_link(url, text)

    def em(self, text: str) -> str:
        return _italic(text)


class BareEscapes(Escapes):
    """
    No escape sequences at all.
    """
    name = 'bare'

    def rgb(self, colour: tuple[int,int,int]) -> str:
        return ''

    def uri(self, url: str, text: str) -> str:
        return text

    def em(self, text: str) -> str:
        return f'*{ text }*'


class TestEscapes(Escapes):
    """
    Readable markers instead of escape sequences, so output can be compared in tests.
    """
    __test__ = False # not a pytest test class

    name = 'test'
    fail = 'FAIL'
    passed = 'PASS'
    skip = 'SKIP'
    zero = 'ZERO'
    nope = 'NOPE'
    endc = 'ENDC'

    def rgb(self, colour: tuple[int,int,int]) -> str:
        return f'#{ colour[0]:02x}{ colour[1]:02x}{ colour[2]:02x}'

    def uri(self, url: str, text: str) -> str:
        return f'[{ text }]({ url })'

    def em(self, text: str) -> str:
        return f'*{ text }*'


ESCAPES : dict[str, Escapes] = {
    e.name : e for e in (FullEscapes(), MonoEscapes(), BareEscapes(), TestEscapes())
}


def guess_escapes(override: str | None = None, environ: Mapping[str,str] | None = None) -> Escapes:
    """
    Determine the Escapes to use.

    override: explicit choice from the command-line; if not given, the TESTSIEVE_ESC
      environment variable is consulted instead.
    environ: the environment, defaults to os.environ
    """
    if environ is None:
        environ = os.environ
    if override is None:
        override = environ.get(ESC_ENV_VAR)

    if override:
        if override in ESCAPES:
            return ESCAPES[override]
        warning(f'Unknown escape style "{ override }", expected one of: { ", ".join(ESCAPES) }. Guessing instead.')

    # Some read NO_COLOR as "no colour", others as "no escape sequences whatsoever".
    # Present means the former, "strict" means the latter.
    if 'NO_COLOR' in environ:
        ret = ESCAPES['bare'] if environ['NO_COLOR'] == 'strict' else ESCAPES['mono']
        trace('NO_COLOR is set, using', ret)
        return ret

    term = environ.get('TERM', '')
    if not term or term == 'dumb':
        return ESCAPES['bare']
    if environ.get('COLORTERM') == 'truecolor':
        return ESCAPES['full']
    return ESCAPES['mono']
