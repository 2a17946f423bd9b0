"""
Main entry point for CLI invocation
"""

from argparse import ArgumentError
import sys
import traceback
from typing import IO

import msgspec

from testsieve.cancellation import CancellationToken, InterruptWatcher
from testsieve.classifier import EventClassifier, ProtocolViolationError
from testsieve.driver import StreamDriver
from testsieve.escapes import Escapes, guess_escapes
from testsieve.prefix import PrefixInferencer
from testsieve.progress import ProgressReporter, Verbosity
from testsieve.progress.quiet import QuietProgressReporter
from testsieve.progress.terse import TerseProgressReporter
from testsieve.progress.verbose import VerboseProgressReporter
from testsieve.reporting import fatal, set_reporting_level, trace
from testsieve.source import SpawnError, create_event_source, lookup_module_path
from testsieve.utils import TESTSIEVE_VERSION

USAGE = """\
testsieve [-q|-v] [-c (a.test|-)] [-trim prefix] [-esc style] [-|go help arguments]

The ‘-q’ and ‘-v’ flags control the amount of progress reporting:
 -q  quieter: one character per package.
 -v  verbose: one line per test (or skipped package).
Without -q nor -v, progress is reported at one line per package.

The ‘-trim’ flag specifies a prefix to remove from package names. If not given
it defaults to the output of ‘go list -m’. If that fails (e.g. because you're
not running in a module) it's adjusted on the fly to be the longest common
path prefix of package names reported by the test runner, which means the very
first package will get it wrong. In a pinch you can ‘-trim ""’.

The ‘-’ flag tells testsieve to read the JSON output of a test run from stdin:

    go test -json ./... > tests.json
    testsieve - < tests.json

The ‘-c’ flag tells testsieve to run a precompiled test binary:

    go test -c ./foo/
    testsieve -c foo.test

If the argument to ‘-c’ is ‘-’, plain (non-JSON) test output is read from stdin:

    go test -v ./... > tests.out
    testsieve -c - < tests.out

The ‘-esc’ flag picks the escape sequences to use: full, mono, bare or test.
It overrides $TESTSIEVE_ESC, which overrides guessing from $NO_COLOR, $TERM
and $COLORTERM. NO_COLOR=strict means no escape sequences at all.

‘--debug’ (repeatable) makes testsieve talk about itself on stderr, and
‘--version’ shows its version.

Lastly, the ‘--’ flag tells testsieve to stop looking at its arguments and
pass everything after it to ‘go test’.

go help arguments and flags are as per usual (or you can ‘testsieve -- -h’):
[build/test flags] [packages] [build/test flags & test binary flags]
Run ‘go help test’ and ‘go help testflag’ for details."""

VALUE_FLAGS = [ '-c', '-esc', '-trim' ]


class Options(msgspec.Struct, frozen=True):
    """
    Everything the command-line said.
    """
    verbosity: Verbosity = Verbosity.TERSE
    read_stdin: bool = False
    compiled: str | None = None
    trim: str | None = None
    esc: str | None = None
    debug: int = 0
    show_help: bool = False
    show_version: bool = False
    passthrough: list[str] = []


def parse_args(argv: list[str]) -> Options:
    """
    Separate our own flags from the ones meant for go test. Arguments we do not
    recognize exactly, and everything after '--', end up in passthrough in their
    original order. Raises ArgumentError for incomplete or conflicting flags.
    """
    values : dict[str, str] = {}
    verbosity = Verbosity.TERSE
    read_stdin = False
    debug = 0
    show_help = False
    show_version = False
    passthrough : list[str] = []

    i = 0
    while i < len(argv):
        arg = argv[i]
        name, eq, value = arg.partition('=')
        if eq:
            if name in VALUE_FLAGS:
                values[name] = value
            else:
                passthrough.append(arg)
        else:
            match arg:
                case '--':
                    passthrough += argv[i+1:]
                    break
                case '-c' | '-esc' | '-trim':
                    i += 1
                    if i >= len(argv):
                        raise ArgumentError(None, f'Flag { arg } requires a value.')
                    values[arg] = argv[i]
                case '-':
                    read_stdin = True
                case '-q':
                    verbosity = Verbosity.QUIET
                case '-v':
                    verbosity = Verbosity.VERBOSE
                case '-json':
                    pass # always implied
                case '-h' | '-help' | '--help':
                    show_help = True
                case '--version':
                    show_version = True
                case '--debug':
                    debug += 1
                case _:
                    passthrough.append(arg)
        i += 1

    compiled = values.get('-c')
    if read_stdin and compiled is not None:
        if compiled == '-':
            raise ArgumentError(None, 'The flags ‘-c -’ and ‘-’ both read from stdin. Provide only one.')
        raise ArgumentError(None, 'The flags ‘-c’ and ‘-’ are mutually exclusive (did you mean ‘-c -’?)')

    return Options(
            verbosity=verbosity,
            read_stdin=read_stdin,
            compiled=compiled,
            trim=values.get('-trim'),
            esc=values.get('-esc'),
            debug=debug,
            show_help=show_help,
            show_version=show_version,
            passthrough=passthrough)


def create_progress_reporter(verbosity: Verbosity, esc: Escapes) -> ProgressReporter:
    match verbosity:
        case Verbosity.QUIET:
            return QuietProgressReporter(esc)
        case Verbosity.VERBOSE:
            return VerboseProgressReporter(esc)
    return TerseProgressReporter(esc)


def run(options: Options, out: IO[str] | None = None, diagnostics: IO[str] | None = None) -> int:
    """
    Perform the test run described by options. The exit status does not depend on
    whether tests passed: the report says that.
    """
    if out is None:
        out = sys.stdout
    if diagnostics is None:
        diagnostics = sys.stderr
    esc = guess_escapes(options.esc)
    trace('Using escapes', esc)
    reporter = create_progress_reporter(options.verbosity, esc)

    seed = options.trim if options.trim is not None else lookup_module_path()
    classifier = EventClassifier(PrefixInferencer(seed), diagnostics)
    driver = StreamDriver(classifier, reporter, out)

    token = CancellationToken()
    with InterruptWatcher(token):
        with create_event_source(options.read_stdin, options.compiled, options.passthrough, token) as source:
            driver.consume(source.lines())
        driver.finish()
    return 0


def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for CLI invocation.
    """
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except ArgumentError as e:
        fatal(e.message)
        return # make linter happy

    if options.show_help:
        print(USAGE)
        sys.exit(0)
    if options.show_version:
        print(TESTSIEVE_VERSION)
        sys.exit(0)

    set_reporting_level(options.debug)

    try:
        ret = run(options)
        sys.exit(ret)

    except (ProtocolViolationError, SpawnError) as e:
        fatal(str(e))
    except Exception as e: # pylint: disable=broad-exception-caught
        if options.debug > 1:
            traceback.print_exception(e)
        fatal(str(type(e)), '--', e)


if __name__ == '__main__':
    main()
