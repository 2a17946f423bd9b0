"""
Test the progress reporters and the big display.
"""

import pytest

from testsieve.escapes import Escapes
from testsieve.events import Action, Event
from testsieve.fonts import BORING, BRAILLE, DOUBLE, FUTURE
from testsieve.progress import RATIO_COLOURS, big_lines, ratio_bucket
from testsieve.progress.quiet import QuietProgressReporter
from testsieve.progress.terse import TerseProgressReporter
from testsieve.progress.verbose import VerboseProgressReporter
from testsieve.summary import Counters, RunSummary
from testsieve.utils import align_right_columns, count_noun


def _counters(passed: int = 0, failed: int = 0, skipped: int = 0) -> Counters:
    ret = Counters()
    for action, n in [ (Action.PASS, passed), (Action.FAIL, failed), (Action.SKIP, skipped) ]:
        for _ in range(n):
            ret.record(action)
    return ret


def _summary(tests: Counters, packages: Counters) -> RunSummary:
    ret = RunSummary()
    ret.tests = tests
    ret.packages = packages
    return ret


@pytest.mark.parametrize('passed, ran, expected', [
    (0, 5, 0),
    (1, 9, 1),
    (4, 9, 4),
    (8, 9, 8),
    (9, 9, 8),
    (99, 100, 8),
    (100, 100, 8),
])
def test_ratio_bucket(passed: int, ran: int, expected: int) -> None:
    assert ratio_bucket(passed, ran) == expected


def test_ratio_colours_go_from_red_to_green() -> None:
    assert RATIO_COLOURS[0] == (175, 0, 0)
    assert RATIO_COLOURS[-1] == (0, 175, 0)
    reds = [ c[0] for c in RATIO_COLOURS ]
    greens = [ c[1] for c in RATIO_COLOURS ]
    assert reds == sorted(reds, reverse=True)
    assert greens == sorted(greens)


@pytest.mark.parametrize('tests, expected', [
    (_counters(), 'ZERO0 tests run.ENDC'),
    (_counters(skipped=4), 'ZERO0 tests run.ENDC'),
    (_counters(passed=3), '#00af00100% tests passed.ENDC'),
    (_counters(passed=1, failed=19), '#af00005% tests passed.ENDC'),
    (_counters(passed=2, failed=1, skipped=10), '#6d920066% tests passed.ENDC'),
    (_counters(failed=2), '#af00000% tests passed.ENDC'),
])
def test_big_lines(esc: Escapes, tests: Counters, expected: str) -> None:
    assert big_lines(tests, esc, BORING) == [ expected ]


@pytest.mark.parametrize('font', [ BRAILLE, FUTURE, DOUBLE, BORING ])
def test_big_lines_has_font_height(esc: Escapes, font) -> None:
    assert len(big_lines(_counters(passed=1), esc, font)) == font.height
    assert len(big_lines(_counters(), esc, font)) == font.height


def test_count_noun() -> None:
    assert count_noun(0, 'test', 'tests') == '0 tests'
    assert count_noun(1, 'test', 'tests') == '1 test'
    assert count_noun(2, 'package', 'packages') == '2 packages'


def test_align_right_columns() -> None:
    assert align_right_columns([ 'a\tbb\tccc', 'dddd\te\tf' ]) == [
        '     a  bbccc',
        '  dddd   ef',
    ]


class TestTerse:
    def test_reports_packages(self, esc: Escapes) -> None:
        reporter = TerseProgressReporter(esc)
        prefix = 'example.com/'

        assert reporter.on_event(Event(Action.PASS, 'example.com/a', display_prefix=prefix)) == 'PASS✓ENDC …/a\n'
        assert reporter.on_event(Event(Action.SKIP, 'example.com/b', display_prefix=prefix)) == 'SKIP- …/bENDC\n'
        assert reporter.on_event(Event(Action.FAIL, 'example.com/c', display_prefix=prefix)) == 'FAIL×ENDC …/c\n'
        assert reporter.on_event(
                Event(Action.ERROR, 'example.com/d', display_prefix=prefix, placeholder=True)) == 'FAILℯ …/dENDC\n'


    def test_ignores_tests_and_output(self, esc: Escapes) -> None:
        reporter = TerseProgressReporter(esc)

        assert reporter.on_event(Event(Action.PASS, 'p', 'TestX')) == ''
        assert reporter.on_event(Event(Action.FAIL, 'p', 'TestX')) == ''
        assert reporter.on_event(Event(Action.OUTPUT, 'p', output='ok  \tp\n')) == ''
        assert reporter.on_event(Event(Action.OUTPUT, output='noise\n', placeholder=True)) == ''


    def test_summary(self, esc: Escapes) -> None:
        reporter = TerseProgressReporter(esc)
        packages = _counters(passed=2, failed=1, skipped=1)
        packages.record(Action.ERROR)
        lines = reporter.on_summary(_summary(_counters(passed=5, failed=2, skipped=1), packages))

        assert lines[0] == ('Found 8 tests in 5 packages (1 package had SKIPNO testsENDC)'
                            + ', and 1 packages did not even build.')
        assert lines[1] == '5 tests PASSpassedENDC, and 2 tests FAILfailedENDC (1 tests were SKIPskippedENDC).'
        assert len(lines) == 2 + BRAILLE.height


    def test_summary_without_tests(self, esc: Escapes) -> None:
        reporter = TerseProgressReporter(esc)
        lines = reporter.on_summary(_summary(_counters(), _counters(skipped=1)))

        assert lines[0] == 'Found 0 tests in 1 package (1 package had SKIPNO testsENDC).'
        assert lines[1].startswith('ZERO')


class TestQuiet:
    def test_one_character_per_package(self, esc: Escapes) -> None:
        reporter = QuietProgressReporter(esc)

        assert not reporter.needs_newline
        assert reporter.on_event(Event(Action.PASS, 'p/a', 'TestX')) == ''
        assert not reporter.needs_newline

        assert reporter.on_event(Event(Action.PASS, 'p/a', display_prefix='p/')) == 'PASS•ENDC'
        assert reporter.on_event(Event(Action.SKIP, 'p/b', display_prefix='p/')) == 'SKIP•ENDC'
        assert reporter.on_event(Event(Action.FAIL, 'p/c', display_prefix='p/')) == 'FAIL[×](…/c)ENDC'
        assert reporter.on_event(Event(Action.ERROR, 'p/d', display_prefix='p/', placeholder=True)) == 'FAIL[e](…/d)ENDC'
        assert reporter.needs_newline


    def test_summary_ends_the_line(self, esc: Escapes) -> None:
        reporter = QuietProgressReporter(esc)
        reporter.on_event(Event(Action.PASS, 'p'))
        lines = reporter.on_summary(_summary(_counters(passed=2), _counters(passed=1)))

        assert lines == [ '', '2 PASSpassedENDC.   #00af00１００％　ｔｅｓｔｓ　ｐａｓｓｅｄ．ENDC' ]


    def test_summary_counts(self, esc: Escapes) -> None:
        reporter = QuietProgressReporter(esc)
        lines = reporter.on_summary(_summary(_counters(passed=1, failed=1, skipped=1), _counters(failed=1)))

        assert lines == [ '1 SKIPskippedENDC, 1 FAILfailedENDC, 1 PASSpassedENDC.   #937100５０％　ｔｅｓｔｓ　ｐａｓｓｅｄ．ENDC' ]


    def test_summary_nothing_ran(self, esc: Escapes) -> None:
        reporter = QuietProgressReporter(esc)

        assert reporter.on_summary(RunSummary()) == [ '  ZERO０　ｔｅｓｔｓ　ｒｕｎ．ENDC' ]


class TestVerbose:
    def test_reports_tests(self, esc: Escapes) -> None:
        reporter = VerboseProgressReporter(esc)
        prefix = 'p/'

        assert reporter.on_event(Event(Action.PASS, 'p/a', 'TestX', display_prefix=prefix)) == 'PASS✓ENDC …/a:TestX\n'
        assert reporter.on_event(Event(Action.SKIP, 'p/a', 'TestY', display_prefix=prefix)) == 'SKIP- …/a:TestYENDC\n'
        assert reporter.on_event(Event(Action.FAIL, 'p/a', 'TestZ', display_prefix=prefix)) == 'FAIL×ENDC …/a:TestZ\n'
        assert reporter.on_event(Event(Action.PASS, 'p/a', display_prefix=prefix)) == ''


    def test_reports_packages_without_tests(self, esc: Escapes) -> None:
        reporter = VerboseProgressReporter(esc)

        assert reporter.on_event(Event(Action.SKIP, 'p/b', display_prefix='p/')) == 'SKIP- …/bENDC\n'
        assert reporter.on_event(Event(Action.ERROR, 'p/c', display_prefix='p/', placeholder=True)) == 'FAILℯENDC …/c\n'
        assert reporter.on_event(Event(Action.FAIL, 'p/d', display_prefix='p/')) == 'FAIL×ENDC …/d\n'


    def test_failed_package_reported_once(self, esc: Escapes) -> None:
        reporter = VerboseProgressReporter(esc)

        assert reporter.on_event(Event(Action.FAIL, 'p/a', 'TestOne')) == 'FAIL×ENDC p/a:TestOne\n'
        assert reporter.on_event(Event(Action.FAIL, 'p/a', 'TestTwo')) == 'FAIL×ENDC p/a:TestTwo\n'
        assert reporter.on_event(Event(Action.FAIL, 'p/a')) == ''
        assert reporter.packages_with_failed_tests == { 'p/a' }


    def test_test_without_package(self, esc: Escapes) -> None:
        reporter = VerboseProgressReporter(esc)

        assert reporter.on_event(Event(Action.PASS, '', 'TestX')) == 'PASS✓ENDC TestX\n'


    def test_summary_table(self, esc: Escapes) -> None:
        reporter = VerboseProgressReporter(esc)
        lines = reporter.on_summary(_summary(_counters(passed=2), _counters(passed=1)))
        big = big_lines(_counters(passed=2), esc, FUTURE)

        assert len(lines) == 6
        assert lines[0] == '  NOPE' + ' ' * 10 + '  Tests' + '  Packages' + '  ENDC'
        assert lines[1] == '  NOPE' + '     Total' + '     2 ' + '        1 ' + '  ENDC'
        assert lines[2] == '  PASS' + '    Passed' + '     2 ' + '        1 ' + '  ENDC' + '  ' + big[0]
        assert lines[3].endswith('  ' + big[1])
        assert lines[4].endswith('  ' + big[2])
        assert lines[5] == '  FAIL' + "  Error'ed" + '     - ' + '        0 ' + '  ENDC'


    def test_summary_nothing_at_all(self, esc: Escapes) -> None:
        reporter = VerboseProgressReporter(esc)
        lines = reporter.on_summary(RunSummary())

        assert lines == big_lines(Counters(), esc, FUTURE)
        assert all( line.startswith('ZERO') for line in lines )
