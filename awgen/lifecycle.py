from __future__ import annotations

from statemachine import State, StateMachine


class GameLifecycle(StateMachine):
    """Guards the script host's run state.

    created -> running -> stopped. A game starts once and never restarts.
    """

    created = State("created", value="created", initial=True)
    running = State("running", value="running")
    stopped = State("stopped", value="stopped", final=True)

    start = created.to(running)
    shutdown = running.to(stopped)

    @property
    def is_running(self) -> bool:
        return self.running.is_active

    @property
    def has_started(self) -> bool:
        return not self.created.is_active
