"""A trigger-driven finite state machine."""

from typing import Callable, Dict, Optional, Protocol

State = str
Trigger = str

EntryHandler = Callable[[State], None]
FailHandler = Callable[[BaseException], None]
SuccessHandler = Callable[[], None]
ChangeHandler = Callable[[State, State], None]


class StateMachineError(Exception):
    """Raised when a trigger cannot be carried out."""


class IState(Protocol):
    """An object that describes a state and its behaviour."""

    def state(self) -> State: ...

    def on_entry(self, state: State) -> None: ...

    def on_exit(self, state: State) -> None: ...

    def on_fail(self, error: BaseException) -> None: ...

    def on_success(self) -> None: ...


class StateConfig:
    """Transitions and callbacks of one state; setters chain."""

    def __init__(self) -> None:
        self.allowable: Dict[Trigger, State] = {}
        self.entry_handler: Optional[EntryHandler] = None
        self.exit_handler: Optional[EntryHandler] = None
        self.success_handler: Optional[SuccessHandler] = None
        self.fail_handler: Optional[FailHandler] = None
        self.fallback_state: State = ""

    def allow(self, trigger: Trigger, state: State) -> "StateConfig":
        """Let ``trigger`` move to ``state``; the first mapping for a trigger wins."""
        self.allowable.setdefault(trigger, state)
        return self

    def on_entry(self, handler: EntryHandler) -> "StateConfig":
        """Set the handler run on entering; raising marks the entry as failed."""
        self.entry_handler = handler
        return self

    def on_exit(self, handler: EntryHandler) -> "StateConfig":
        """Set the handler run on leaving; raising aborts the transition."""
        self.exit_handler = handler
        return self

    def on_success(self, handler: SuccessHandler) -> "StateConfig":
        """Set the handler run after a transition completes."""
        self.success_handler = handler
        return self

    def on_fail(self, handler: FailHandler) -> "StateConfig":
        """Set the handler run when entry fails."""
        self.fail_handler = handler
        return self

    def fallback(self, state: State) -> "StateConfig":
        """Set the state whose success handler runs when entry fails."""
        self.fallback_state = state
        return self


def _print_change(prev: State, curr: State) -> None:
    print(f"State transitions from {prev} to {curr}")


class StateMachine:
    """Moves between configured states when triggers are fired."""

    def __init__(self, initial_state: State) -> None:
        self._configs: Dict[State, StateConfig] = {}
        self._on_changed: Optional[ChangeHandler] = None
        self._previous: State = ""
        self._current: State = initial_state

    def state(self, name: State) -> StateConfig:
        """Return the configuration of ``name``, creating it if needed."""
        return self._configs.setdefault(name, StateConfig())

    def istate(self, state: IState) -> StateConfig:
        """Register ``state`` using its own callbacks; it falls back to itself."""
        name = state.state()
        if name not in self._configs:
            config = StateConfig()
            config.entry_handler = state.on_entry
            config.exit_handler = state.on_exit
            config.success_handler = state.on_success
            config.fail_handler = state.on_fail
            config.fallback_state = name
            self._configs[name] = config
        return self._configs[name]

    def on_state_changed(self, handler: Optional[ChangeHandler]) -> None:
        """Set the handler told of each transition; None prints transitions."""
        self._on_changed = handler if handler is not None else _print_change

    def fire(self, trigger: Trigger) -> None:
        """Carry out ``trigger`` from the current state."""
        current_conf = self._configs.get(self._current)
        if current_conf is None:
            raise StateMachineError(f"statemachine has no current state {self._current}")

        next_state = current_conf.allowable.get(trigger)
        if next_state is None:
            raise StateMachineError(f"trigger {trigger} not allowed")

        if current_conf.exit_handler is not None:
            current_conf.exit_handler(self._current)

        new_conf = self._configs.get(next_state)
        if new_conf is None:
            raise StateMachineError(f"no configured state {next_state}")
        if new_conf.entry_handler is None:
            raise StateMachineError(f"no state behavior set for triggered state {next_state}")

        try:
            new_conf.entry_handler(next_state)
        except Exception as exc:
            if new_conf.fail_handler is not None:
                new_conf.fail_handler(exc)
            if not new_conf.fallback_state:
                raise
            fallback = self._configs.get(new_conf.fallback_state)
            if fallback is None:
                raise StateMachineError(
                    f"no configured state {new_conf.fallback_state}"
                ) from exc
            new_conf = fallback

        if self._on_changed is not None:
            self._on_changed(self._current, next_state)
        self._previous, self._current = self._current, next_state

        if new_conf.success_handler is not None:
            new_conf.success_handler()

    def current_state(self) -> State:
        """Return the current state."""
        return self._current

    @property
    def previous_state(self) -> State:
        """The state before the last transition, or an empty string."""
        return self._previous