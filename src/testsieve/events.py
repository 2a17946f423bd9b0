"""
The records flowing through testsieve: the wire format produced by the test runner,
and the normalized Event the rest of the system works with.
"""

from enum import Enum

import msgspec

from testsieve.prefix import display_package


class Action(Enum):
    PASS = 'pass'
    FAIL = 'fail'
    SKIP = 'skip'
    ERROR = 'error'
    OUTPUT = 'output'


    @property
    def is_terminal(self) -> bool:
        return self is not Action.OUTPUT


    @staticmethod
    def normalize(raw: str) -> 'Action':
        """
        Map the test runner's action string to an Action. Lifecycle actions we do not
        distinguish (run, pause, cont, start, bench, ...) are treated as output.
        """
        try:
            return Action(raw)
        except ValueError:
            return Action.OUTPUT


class Scope(Enum):
    TEST = 1
    PACKAGE = 2


class Placeholder(Enum):
    """
    Buffer identity for output that cannot be attributed to any test, and for
    package build errors. Being an Enum member, it never equals a (package, test) key.
    """
    UNATTRIBUTED = 'unattributed'


Identity = tuple[str, str] | Placeholder


class RawTestEvent(msgspec.Struct, rename='pascal'):
    """
    One line of `go test -json` output. Time and Elapsed are present some of the time;
    we have no use for them and let the decoder skip them.
    """
    action: str
    package: str = ''
    test: str = ''
    output: str = ''


class Event(msgspec.Struct, frozen=True):
    """
    A normalized lifecycle notification, with the display prefix in effect when it
    was classified.
    """
    action: Action
    package: str = ''
    test: str = ''
    output: str = ''
    display_prefix: str | None = None
    placeholder: bool = False


    @property
    def scope(self) -> Scope:
        if self.test and not self.placeholder:
            return Scope.TEST
        return Scope.PACKAGE


    @property
    def identity(self) -> Identity | None:
        """
        The key of this event's in-flight output, independent of the display prefix.
        None if the event's output is not tracked (package-scope output).
        """
        if self.placeholder:
            return Placeholder.UNATTRIBUTED
        if self.test:
            return (self.package, self.test)
        return None


    def pkg(self) -> str:
        return display_package(self.package, self.display_prefix)


    def name(self) -> str:
        pkg = self.pkg()
        if not pkg:
            return self.test
        return f'{ pkg }:{ self.test }'
