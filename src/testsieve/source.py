"""
Where the event stream comes from: standard input, or a process we start for the purpose.
"""

from abc import ABC, abstractmethod
import os
import shutil
import subprocess
import sys
from typing import IO, Iterable, Iterator

from testsieve.cancellation import CancellationToken
from testsieve.reporting import info, trace, warning

GO = 'go'


class SpawnError(Exception):
    """
    The process that is supposed to produce the event stream could not be found or started.
    """
    pass


def _decode_line(raw: bytes) -> str:
    return raw.removesuffix(b'\n').removesuffix(b'\r').decode('utf-8', errors='replace')


class EventSource(ABC):
    """
    A stream of lines, without their line terminators.
    """
    @abstractmethod
    def lines(self) -> Iterator[str]:
        ...


    def close(self) -> None:
        pass


    def __enter__(self) -> 'EventSource':
        return self


    def __exit__(self, *exc_info) -> None:
        self.close()


class StreamEventSource(EventSource):
    """
    Lines read from an already-open stream, such as standard input.
    """
    def __init__(self, stream: IO[bytes] | Iterable[bytes], token: CancellationToken | None = None):
        self.stream = stream
        self.token = token


    def lines(self) -> Iterator[str]:
        """
        Nobody else to tell when cancelled, so stop reading at the next line.
        """
        for raw in self.stream:
            if self.token is not None and self.token.is_cancelled:
                info('Interrupted, not reading any further')
                return
            yield _decode_line(raw)


class ProcessEventSource(EventSource):
    """
    Lines written to stdout by a process that is started on construction.
    If the token is cancelled, the process is asked to terminate; we keep reading
    whatever it still writes until it closes its stdout.
    """
    def __init__(self, args: list[str], token: CancellationToken, merge_stderr: bool = True, stdin: IO | None = None):
        self.args = args
        trace('Starting:', ' '.join(args))
        try:
            self.process = subprocess.Popen(
                    args,
                    stdin=stdin,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT if merge_stderr else None)
        except OSError as e:
            raise SpawnError(f'Cannot run { args[0] }: { e }') from e
        token.on_cancel(self.terminate)


    def lines(self) -> Iterator[str]:
        stdout = self.process.stdout
        if stdout is None: # make linter happy
            return
        for raw in stdout:
            yield _decode_line(raw)


    def terminate(self) -> None:
        if self.process.poll() is None:
            info('Asking', self.args[0], 'to stop')
            self.process.terminate()


    def close(self) -> None:
        """
        Reap the process. Its exit status says nothing the event stream did not, so it is only traced.
        """
        if self.process.poll() is None:
            self.process.terminate()
        try:
            ret = self.process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            warning(f'{ self.args[0] } did not stop, killing it')
            self.process.kill()
            ret = self.process.wait()
        if self.process.stdout is not None:
            self.process.stdout.close()
        trace(f'{ self.args[0] } exited with status { ret }')


def find_compiled(name: str) -> str:
    """
    Locate the precompiled test binary to run.
    """
    found = shutil.which(name)
    if found is None and os.path.isfile(name) and os.access(name, os.X_OK):
        found = os.path.abspath(name)
    if found is None:
        raise SpawnError(f'Cannot find executable test binary: { name }')
    return found


def create_event_source(
    read_stdin: bool,
    compiled: str | None,
    passthrough: list[str],
    token: CancellationToken
) -> EventSource:
    """
    Set up the event source matching the command-line options.

    read_stdin: the event stream is JSON on our standard input
    compiled: a precompiled test binary to run, or '-' for its plain output on our standard input
    passthrough: arguments for the go test invocation, or the test binary
    """
    if read_stdin:
        return StreamEventSource(sys.stdin.buffer, token)
    if compiled == '-':
        return ProcessEventSource([ GO, 'tool', 'test2json' ], token, merge_stderr=False, stdin=sys.stdin)
    if compiled:
        return ProcessEventSource([ GO, 'tool', 'test2json', find_compiled(compiled), '-test.v', *passthrough ], token, merge_stderr=False)
    return ProcessEventSource([ GO, 'test', '-json', *passthrough ], token)


def lookup_module_path() -> str | None:
    """
    Ask go for the path of the current module, to seed the display prefix.
    None if that does not work, e.g. because we are not in a module.
    """
    try:
        result = subprocess.run([ GO, 'list', '-m' ], capture_output=True, text=True, check=False)
    except OSError as e:
        trace('Cannot determine module path:', e)
        return None
    if result.returncode != 0:
        trace('go list -m failed:', result.stderr.strip())
        return None
    lines = result.stdout.strip().splitlines()
    if len(lines) != 1:
        trace('go list -m did not name exactly one module:', lines)
        return None
    return lines[0]
