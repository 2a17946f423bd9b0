from testsieve.events import Action, Event
from testsieve.fonts import FUTURE
from testsieve.progress import ProgressReporter, big_lines
from testsieve.summary import RunSummary
from testsieve.utils import align_right_columns


class VerboseProgressReporter(ProgressReporter):
    """
    One line per test, plus lines for packages that have no tests to speak for them:
    skipped ones, broken ones, and failed ones none of whose tests failed.
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.packages_with_failed_tests : set[str] = set()


    def on_event(self, event: Event) -> str:
        esc = self.esc
        has_test = bool(event.test) and not event.placeholder
        match event.action:
            case Action.PASS:
                if has_test:
                    return f'{ esc.passed }✓{ esc.endc } { event.name() }\n'
            case Action.SKIP:
                if has_test:
                    return f'{ esc.skip }- { event.name() }{ esc.endc }\n'
                return f'{ esc.skip }- { event.pkg() }{ esc.endc }\n'
            case Action.FAIL:
                if has_test:
                    if event.package:
                        self.packages_with_failed_tests.add(event.package)
                    return f'{ esc.fail }×{ esc.endc } { event.name() }\n'
                if event.package not in self.packages_with_failed_tests:
                    return f'{ esc.fail }×{ esc.endc } { event.pkg() }\n'
            case Action.ERROR:
                return f'{ esc.fail }ℯ{ esc.endc } { event.pkg() }\n'
        return ''


    def on_summary(self, summary: RunSummary) -> list[str]:
        esc = self.esc
        tests = summary.tests
        packages = summary.packages

        big = big_lines(tests, esc, FUTURE)
        if summary.is_zero():
            return big

        # the big display is exactly as tall as the Passed, Skipped and Failed rows
        return align_right_columns([
            f'{ esc.nope }\t\tTests\tPackages\t{ esc.endc }\t',
            f'{ esc.nope }\tTotal\t{ tests.total } \t{ packages.total } \t{ esc.endc }\t',
            f'{ esc.passed }\tPassed\t{ tests.passed } \t{ packages.passed } \t{ esc.endc }\t  { big[0] }',
            f'{ esc.skip }\tSkipped\t{ tests.skipped } \t{ packages.skipped } \t{ esc.endc }\t  { big[1] }',
            f'{ esc.fail }\tFailed\t{ tests.failed } \t{ packages.failed } \t{ esc.endc }\t  { big[2] }',
            f'{ esc.fail }\tError\'ed\t - \t{ packages.errored } \t{ esc.endc }\t',
        ])
