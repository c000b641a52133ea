"""Game-state selector.

The game is always in exactly one ``GameMode``. Transitions are looked
up in a table keyed by ``(mode, action)``; actions come from the
``InputRouter`` (e.g. ENTER in the menu becomes ``"start"``). Anything
not in the table leaves the mode untouched.

``ModeDispatcher`` binds one ``State`` routine to every mode and refuses
to build from a partial mapping, so the per-tick dispatch can never fall
through. It listens to the machine and runs the ``on_exit``/``on_enter``
hooks when the mode changes.

Usage (see ``app.py``):

    machine = GameStateMachine()
    dispatcher = ModeDispatcher(machine, {GameMode.MENU: MenuMode(...), ...})
    while running:
        actions = router.process(events, machine.current)
        dispatcher.handle_actions(actions)
        machine.handle_actions(a.name for a in actions)
        dispatcher.update(dt)
        dispatcher.render(screen)
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple

import pygame

from gamekit.errors import ConfigurationError
from gamekit.logger import get_logger

_state_log = get_logger("state")


class GameMode(Enum):
    MENU = "MENU"
    PLAYING = "PLAYING"
    GAME_OVER = "GAME_OVER"


Transition = Tuple[GameMode, str]
Listener = Callable[[GameMode, GameMode], None]

DEFAULT_TRANSITIONS: Dict[Transition, GameMode] = {
    (GameMode.MENU, "start"): GameMode.PLAYING,
    (GameMode.PLAYING, "end"): GameMode.GAME_OVER,
    (GameMode.GAME_OVER, "restart"): GameMode.PLAYING,
    (GameMode.GAME_OVER, "start"): GameMode.MENU,
}


class GameStateMachine:
    """Finite-state machine over ``GameMode`` driven by action names."""

    def __init__(
        self,
        transitions: Mapping[Transition, GameMode] | None = None,
        initial: GameMode = GameMode.MENU,
    ) -> None:
        self._transitions: Dict[Transition, GameMode] = dict(
            DEFAULT_TRANSITIONS if transitions is None else transitions
        )
        self._current = initial
        self._listeners: List[Listener] = []
        _state_log.debug("state machine init", initial.name)

    @property
    def current(self) -> GameMode:
        return self._current

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def target(self, action: str) -> GameMode | None:
        """Mode ``action`` would lead to from the current mode, if mapped."""
        return self._transitions.get((self._current, action))

    def handle_action(self, action: str) -> GameMode:
        nxt = self.target(action)
        if nxt is not None:
            self.set(nxt)
        return self._current

    def handle_actions(self, actions: Iterable[str]) -> GameMode:
        """Apply the first mapped action of a frame; later ones are ignored.

        Actions were routed against the mode the frame started in, so
        chaining them through intermediate modes would act on stale input.
        """
        for action in actions:
            if self.target(action) is not None:
                return self.handle_action(action)
        return self._current

    def set(self, mode: GameMode) -> None:
        previous = self._current
        if mode is previous:
            return
        self._current = mode
        _state_log.info("transition", previous.name, "->", mode.name)
        for listener in list(self._listeners):
            listener(previous, mode)


class State:
    """Routine bound to one ``GameMode``.

    All hooks are optional no-ops.
    """

    mode: GameMode

    def on_enter(self, previous: GameMode | None) -> None:  # pragma: no cover - default no-op
        pass

    def on_exit(self, next_mode: GameMode) -> None:  # pragma: no cover - default no-op
        pass

    def handle_actions(self, actions: Sequence) -> None:  # pragma: no cover - default no-op
        pass

    def update(self, dt: float) -> None:  # pragma: no cover - default no-op
        pass

    def render(self, surface: pygame.Surface) -> None:  # pragma: no cover - default no-op
        pass


class ModeDispatcher:
    """Routes loop callbacks to the routine of the machine's current mode."""

    def __init__(self, machine: GameStateMachine, states: Mapping[GameMode, State]) -> None:
        missing = [m.name for m in GameMode if m not in states]
        if missing:
            raise ConfigurationError(f"no routine registered for mode(s): {', '.join(missing)}")
        self.machine = machine
        self._states: Dict[GameMode, State] = dict(states)
        machine.add_listener(self._on_transition)
        self.current.on_enter(None)

    @property
    def current(self) -> State:
        return self._states[self.machine.current]

    def _on_transition(self, previous: GameMode, mode: GameMode) -> None:
        self._states[previous].on_exit(mode)
        self._states[mode].on_enter(previous)

    def handle_actions(self, actions: Sequence) -> None:
        if actions:
            _state_log.debug("actions ->", self.machine.current.name, [getattr(a, "name", a) for a in actions])
        self.current.handle_actions(actions)

    def update(self, dt: float) -> None:
        self.current.update(dt)

    def render(self, surface: pygame.Surface) -> None:
        self.current.render(surface)


__all__ = [
    "GameMode",
    "GameStateMachine",
    "DEFAULT_TRANSITIONS",
    "State",
    "ModeDispatcher",
]
