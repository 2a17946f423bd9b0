"""
Infer the common leading path of package names so that reports can elide it.
"""

from enum import Enum

from testsieve.reporting import trace

SEPARATOR = '/'
ELISION_MARKER = '…'
ROOT_MARKER = '/'


class PrefixState(Enum):
    UNSET = 1
    SEEDED = 2
    NARROWED = 3


def has_segment_prefix(package: str, prefix: str, sep: str = SEPARATOR) -> bool:
    """
    Is prefix a leading run of whole path segments of package? "foo/bar" has the
    segment prefix "foo" and "foo/", but not "foo/b".
    """
    if not prefix or package == prefix:
        return True
    if prefix.endswith(sep):
        return package.startswith(prefix)
    return package.startswith(prefix + sep)


def common_prefix(a: str, b: str, sep: str = SEPARATOR) -> str:
    """
    The longest common prefix of a and b that consists of complete path segments,
    including the final separator. If one is a segment prefix of the other, that one
    is returned as-is.
    """
    if a == b:
        return a
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if has_segment_prefix(longer, shorter, sep):
        return shorter

    last = -1
    for i, (x, y) in enumerate(zip(a, b)):
        if x != y:
            break
        if x == sep:
            last = i
    return a[:last + 1]


def display_package(package: str, prefix: str | None, sep: str = SEPARATOR) -> str:
    """
    Shorten package for display by eliding prefix. The separator ending the prefix
    stays visible, and a package equal to the prefix is shown as the root marker.
    """
    if not prefix:
        return package
    trim = prefix.rstrip(sep)
    if not trim or not has_segment_prefix(package, prefix, sep):
        return package
    return ELISION_MARKER + (package[len(trim):] or ROOT_MARKER)


class PrefixInferencer:
    """
    Tracks the display prefix over the packages seen in a run.

    Starting unset, the first package seen becomes the prefix. A seed, typically the
    module path, is kept as long as every package lives below it. Once a package does
    not, the prefix is narrowed to the common ancestor, and from then on it only ever
    shrinks.
    """
    def __init__(self, seed: str | None = None, sep: str = SEPARATOR):
        self.sep = sep
        if seed is None:
            self.state = PrefixState.UNSET
            self.prefix = ''
        else:
            self.state = PrefixState.SEEDED
            self.prefix = seed


    @property
    def current(self) -> str | None:
        """
        The prefix in effect, or None if no package has been observed and there was no seed.
        """
        if self.state == PrefixState.UNSET:
            return None
        return self.prefix


    def observe(self, package: str) -> str | None:
        """
        Take package into account, and return the prefix now in effect.
        Empty package identifiers carry no information and are ignored.
        """
        if not package:
            return self.current

        if self.state == PrefixState.UNSET:
            self.prefix = package
            self.state = PrefixState.NARROWED
            trace('Provisional prefix from first package:', package)

        elif not has_segment_prefix(package, self.prefix, self.sep):
            narrowed = common_prefix(self.prefix, package, self.sep)
            trace(f'Narrowing prefix "{ self.prefix }" to "{ narrowed }" because of package "{ package }"')
            self.prefix = narrowed
            self.state = PrefixState.NARROWED

        return self.prefix
