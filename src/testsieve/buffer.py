"""
Holds the output of tests that are still running, until we know whether anybody
will ever want to see it.
"""

from testsieve.events import Action, Event, Identity, Placeholder


class InFlightOutputBuffer:
    """
    Output chunks by test identity, for tests that have not reached a terminal
    classification yet. When a test fails or errors, its chunks move, in arrival order,
    to the append-only failure log; when it passes or is skipped, they are dropped.
    """
    def __init__(self) -> None:
        self._in_flight : dict[Identity, list[str]] = {}
        self._failures : list[str] = []


    def on_output(self, identity: Identity, text: str) -> None:
        if text:
            self._in_flight.setdefault(identity, []).append(text)


    def on_terminal(self, identity: Identity, action: Action, text: str = '') -> None:
        """
        Close the entry for identity. text is output carried by the terminal event itself.
        """
        self.on_output(identity, text)
        chunks = self._in_flight.pop(identity, [])
        if action in (Action.FAIL, Action.ERROR):
            self._failures.extend(chunks)


    def track(self, event: Event) -> None:
        """
        Route a classified event to on_output or on_terminal, if its output is tracked at all.
        """
        identity = event.identity
        if identity is None:
            return
        if event.action.is_terminal:
            self.on_terminal(identity, event.action, event.output)
        else:
            self.on_output(identity, event.output)


    def settle_unattributed(self) -> None:
        """
        End of the run: output that never belonged to any test goes to the failure log
        if anything failed at all, and is dropped otherwise.
        """
        chunks = self._in_flight.pop(Placeholder.UNATTRIBUTED, [])
        if self._failures:
            self._failures.extend(chunks)


    @property
    def failures(self) -> list[str]:
        """
        The failure log: all chunks of failed or errored tests, in arrival order.
        """
        return list(self._failures)


    def has_failures(self) -> bool:
        return len(self._failures) > 0


    def n_in_flight(self) -> int:
        return len(self._in_flight)
