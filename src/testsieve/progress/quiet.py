from testsieve.events import Action, Event, Scope
from testsieve.fonts import DOUBLE
from testsieve.progress import ProgressReporter, big_lines
from testsieve.summary import RunSummary


class QuietProgressReporter(ProgressReporter):
    """
    One character per package, all on one line. Failing packages link to their name.
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.needs_newline = False


    def on_event(self, event: Event) -> str:
        if event.scope == Scope.TEST:
            return ''
        esc = self.esc
        match event.action:
            case Action.PASS:
                ret = f'{ esc.passed }•{ esc.endc }'
            case Action.SKIP:
                ret = f'{ esc.skip }•{ esc.endc }'
            case Action.FAIL:
                ret = f'{ esc.fail }{ esc.uri(event.pkg(), "×") }{ esc.endc }'
            case Action.ERROR:
                ret = f'{ esc.fail }{ esc.uri(event.pkg(), "e") }{ esc.endc }'
            case _:
                return ''
        self.needs_newline = True
        return ret


    def on_summary(self, summary: RunSummary) -> list[str]:
        esc = self.esc
        tests = summary.tests

        ret = []
        if self.needs_newline:
            ret.append('')
            self.needs_newline = False

        counts = []
        if tests.skipped > 0:
            counts.append(f'{ tests.skipped } { esc.skip }skipped{ esc.endc }')
        if tests.failed > 0:
            counts.append(f'{ tests.failed } { esc.fail }failed{ esc.endc }')
        if tests.passed > 0:
            counts.append(f'{ tests.passed } { esc.passed }passed{ esc.endc }')

        line = ', '.join(counts) + '. ' if counts else ''
        line += '  ' + big_lines(tests, esc, DOUBLE)[0]
        ret.append(line)
        return ret
