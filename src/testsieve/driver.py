"""
The outer loop: classify, count, buffer and report every line of the event stream,
then summarize and dump the output of whatever failed.
"""

from enum import Enum
import random
from typing import IO, Iterable

from testsieve.buffer import InFlightOutputBuffer
from testsieve.classifier import EventClassifier
from testsieve.escapes import Escapes
from testsieve.events import Event
from testsieve.progress import ProgressReporter
from testsieve.reporting import trace
from testsieve.summary import RunSummary


class DriverState(Enum):
    AWAITING_INPUT = 1
    RUNNING = 2
    SUMMARIZING = 3
    FAILURE_DUMP = 4
    DONE = 5


def disparage(esc: Escapes, rng: random.Random) -> str:
    """
    Something to say before listing the failures.
    """
    disses = [
        'Below is a catalogue of your failures.',
        "I'm not mad. I'm disappointed.",
        'Crushing failure and despair.',
        'Are you even trying?',
        'Maybe you should take a break.',
        'One should not fear failure. But oh, dear.',
        'Once more unto the breach, dear friends, once more.',
        'Aw, bless.',
        f"No, no, I'm laughing { esc.em('with') } you.",
    ]
    return rng.choice(disses)


class StreamDriver:
    """
    Drives one run, from the first line of input to the last line of the failure dump.
    """
    def __init__(
        self,
        classifier: EventClassifier,
        reporter: ProgressReporter,
        out: IO[str],
        rng: random.Random | None = None
    ):
        self.classifier = classifier
        self.reporter = reporter
        self.out = out
        self.rng = rng or random.Random()
        self.summary = RunSummary()
        self.buffer = InFlightOutputBuffer()
        self.state = DriverState.AWAITING_INPUT


    def _transition(self, state: DriverState) -> None:
        trace(f'{ self.state.name } -> { state.name }')
        self.state = state


    def process(self, event: Event) -> None:
        self.reporter.report(event, self.out)
        self.summary.add(event)
        self.buffer.track(event)


    def consume(self, lines: Iterable[str]) -> None:
        """
        Process lines until they run out. Raises ProtocolViolationError on a malformed record.
        """
        self._transition(DriverState.RUNNING)
        for line in lines:
            event = self.classifier.classify_line(line)
            if event is not None:
                self.process(event)


    def finish(self) -> None:
        self._transition(DriverState.SUMMARIZING)
        self.buffer.settle_unattributed()
        self.reporter.summarize(self.summary, self.out)

        if self.buffer.has_failures():
            self._transition(DriverState.FAILURE_DUMP)
            self.out.write(f'\n{ disparage(self.reporter.esc, self.rng) }\n\n')
            for chunk in self.buffer.failures:
                self.out.write(chunk)

        self.out.flush()
        self._transition(DriverState.DONE)


    def run(self, lines: Iterable[str]) -> RunSummary:
        self.consume(lines)
        self.finish()
        return self.summary
