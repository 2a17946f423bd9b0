from testsieve.events import Action, Event, Scope
from testsieve.fonts import BRAILLE
from testsieve.progress import ProgressReporter, big_lines
from testsieve.summary import RunSummary
from testsieve.utils import count_noun


class TerseProgressReporter(ProgressReporter):
    """
    The default: one line per package, and a summary in words followed by the big display.
    """
    def on_event(self, event: Event) -> str:
        if event.scope == Scope.TEST:
            return ''
        esc = self.esc
        match event.action:
            case Action.PASS:
                return f'{ esc.passed }✓{ esc.endc } { event.pkg() }\n'
            case Action.SKIP:
                return f'{ esc.skip }- { event.pkg() }{ esc.endc }\n'
            case Action.FAIL:
                return f'{ esc.fail }×{ esc.endc } { event.pkg() }\n'
            case Action.ERROR:
                return f'{ esc.fail }ℯ { event.pkg() }{ esc.endc }\n'
        return ''


    def on_summary(self, summary: RunSummary) -> list[str]:
        esc = self.esc
        tests = summary.tests
        packages = summary.packages

        text = f'Found { count_noun(tests.total, "test", "tests") } in { count_noun(packages.total, "package", "packages") }'
        if packages.skipped > 0:
            text += f' ({ count_noun(packages.skipped, "package", "packages") } had { esc.skip }NO tests{ esc.endc })'
        if packages.errored > 0:
            text += f', and { packages.errored } packages did not even build'
        if tests.total > 0:
            text += f'.\n{ tests.passed } tests { esc.passed }passed{ esc.endc }'
            if tests.failed > 0:
                text += f', and { tests.failed } tests { esc.fail }failed{ esc.endc }'
            if tests.skipped > 0:
                text += f' ({ tests.skipped } tests were { esc.skip }skipped{ esc.endc })'
        text += '.'

        return text.split('\n') + big_lines(tests, esc, BRAILLE)
