"""
Tallies of terminal classifications, for tests and for packages.
"""

from testsieve.events import Action, Event, Scope


class Counters:
    """
    Counts of one kind of thing (tests, or packages) by terminal classification.
    """
    def __init__(self) -> None:
        self.total = 0
        self.passed = 0
        self.failed = 0
        self.skipped = 0
        self.errored = 0


    def record(self, action: Action) -> None:
        match action:
            case Action.PASS:
                self.passed += 1
            case Action.FAIL:
                self.failed += 1
            case Action.SKIP:
                self.skipped += 1
            case Action.ERROR:
                self.errored += 1
            case _:
                return
        self.total += 1


    def is_zero(self) -> bool:
        """
        True if nothing actually ran: everything was skipped, or there was nothing.
        """
        return self.total - self.skipped <= 0


    @property
    def n_ran(self) -> int:
        return self.total - self.skipped


    @property
    def percent_passed(self) -> int:
        """
        Passed as a percentage of what ran, clamped to 0..100. 0 if nothing ran.
        """
        if self.is_zero():
            return 0
        return max(0, min(100, (100 * self.passed) // self.n_ran))


    def __repr__(self):
        return (f'Counters(total={ self.total }, passed={ self.passed }, failed={ self.failed }'
                + f', skipped={ self.skipped }, errored={ self.errored })')


class RunSummary:
    """
    The two tallies of a run: one for individual tests, one for whole packages.
    """
    def __init__(self) -> None:
        self.tests = Counters()
        self.packages = Counters()


    def add(self, event: Event) -> None:
        if event.scope == Scope.TEST:
            self.tests.record(event.action)
        else:
            self.packages.record(event.action)


    def is_zero(self) -> bool:
        return self.tests.is_zero() and self.packages.is_zero()
