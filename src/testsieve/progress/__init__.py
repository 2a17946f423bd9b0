"""
Progress reporters: the interchangeable ways of telling the user how the run is going.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import IO

from testsieve.escapes import Escapes
from testsieve.events import Event
from testsieve.fonts import Font
from testsieve.summary import Counters, RunSummary


class Verbosity(Enum):
    QUIET = 1 # one character per package
    TERSE = 2 # one line per package
    VERBOSE = 3 # one line per test


# A 9-step HCL blend from #af0000 to #00af00
RATIO_COLOURS : tuple[tuple[int,int,int], ...] = (
    (175, 0, 0),
    (174, 47, 0),
    (169, 72, 0),
    (160, 94, 0),
    (147, 113, 0),
    (130, 130, 0),
    (109, 146, 0),
    (78, 161, 0),
    (0, 175, 0),
)


def ratio_bucket(passed: int, ran: int) -> int:
    """
    Which of the RATIO_COLOURS to use for passed out of ran. All passing lands in the
    last bucket together with almost all passing.
    """
    ret = (9 * passed) // ran
    return max(0, min(len(RATIO_COLOURS) - 1, ret))


def colour_for_ratio(passed: int, ran: int) -> tuple[int,int,int]:
    return RATIO_COLOURS[ratio_bucket(passed, ran)]


def big_lines(tests: Counters, esc: Escapes, font: Font) -> list[str]:
    """
    Render the takeaway of the run, "NN% tests passed." or "0 tests run.", in font.
    Returns one string per row of the font.
    """
    ret = []
    p = tests.percent_passed
    tens, units = divmod(p, 10)
    for i in range(font.height):
        if tests.is_zero():
            parts = [ esc.zero + font.numerals[0][i], font.tests[i], font.run[i] + esc.endc ]
        else:
            number = esc.rgb(colour_for_ratio(tests.passed, tests.n_ran))
            if p == 100:
                number += font.numerals[1][i] + font.numerals[0][i] + font.numerals[0][i]
            else:
                if tens > 0:
                    number += font.numerals[tens][i]
                number += font.numerals[units][i]
            number += font.percent[i]
            parts = [ number, font.tests[i], font.passed[i] + esc.endc ]
        ret.append(font.space.join(parts))
    return ret


class ProgressReporter(ABC):
    """
    Knows how to render Events as they happen, and the summary at the end.
    Rendering returns text; writing it is up to the caller.
    """
    def __init__(self, esc: Escapes):
        self.esc = esc


    @abstractmethod
    def on_event(self, event: Event) -> str:
        """
        Render this event; the empty string if it is not worth mentioning.
        """
        ...


    @abstractmethod
    def on_summary(self, summary: RunSummary) -> list[str]:
        """
        Render the final summary as lines, without line terminators.
        """
        ...


    def report(self, event: Event, fd: IO[str]) -> None:
        text = self.on_event(event)
        if text:
            fd.write(text)
            fd.flush()


    def summarize(self, summary: RunSummary, fd: IO[str]) -> None:
        for line in self.on_summary(summary):
            print(line, file=fd)
