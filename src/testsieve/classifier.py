"""
Turn lines of test runner output into classified Events.
"""

import re
from typing import IO

import msgspec

from testsieve.events import Action, Event, RawTestEvent
from testsieve.prefix import PrefixInferencer

# The test runner prints this outside of its JSON stream when a package fails to build
FAIL_BANNER_REGEX = re.compile(r'FAIL\s+(\S+)')

_decoder = msgspec.json.Decoder(RawTestEvent)


class ProtocolViolationError(Exception):
    """
    A line that claims to be a JSON event record, but is not one.
    """
    def __init__(self, line: str, cause: msgspec.DecodeError):
        super().__init__(f'Malformed test event: { cause }: { line }')
        self.line = line
        self.cause = cause


class EventClassifier:
    """
    Normalizes raw records into Events, keeping the display prefix up to date as it goes.

    Lines that are not JSON are echoed to the diagnostics stream. A "FAIL <package>"
    banner among them becomes a package error; anything else becomes output nobody
    can be blamed for.
    """
    def __init__(self, inferencer: PrefixInferencer, diagnostics: IO[str] | None = None):
        self.inferencer = inferencer
        self.diagnostics = diagnostics


    def classify(self, raw: RawTestEvent) -> Event:
        prefix = self.inferencer.observe(raw.package)
        return Event(
            action=Action.normalize(raw.action),
            package=raw.package,
            test=raw.test,
            output=raw.output,
            display_prefix=prefix)


    def classify_line(self, line: str) -> Event | None:
        """
        Classify one line of the event stream, without its line terminator.
        Returns None for blank lines.
        """
        if not line:
            return None
        if line.startswith('{'):
            try:
                raw = _decoder.decode(line)
            except msgspec.DecodeError as e:
                raise ProtocolViolationError(line, e) from e
            return self.classify(raw)
        return self.classify_unstructured(line)


    def classify_unstructured(self, line: str) -> Event:
        if self.diagnostics is not None:
            print(line, file=self.diagnostics)

        if match := FAIL_BANNER_REGEX.match(line):
            package = match[1]
            return Event(
                action=Action.ERROR,
                package=package,
                output=line + '\n',
                display_prefix=self.inferencer.observe(package),
                placeholder=True)

        return Event(
            action=Action.OUTPUT,
            output=line + '\n',
            display_prefix=self.inferencer.current,
            placeholder=True)
