"""Centralized input routing.

Transforms raw pygame events into ``Action`` records for the active
game mode, so neither the state machine nor the mode routines parse
events themselves.

- Rules are functions ``event -> Action | None`` kept per mode and
  checked in declaration order; the first match wins for an event.
- Key rules come from ``settings.key_bindings`` so bindings can be
  changed on disk. Pointer presses become ``spawn_burst`` actions that
  carry the press position.
- Identical actions within one frame collapse to the first occurrence
  (holding two keys bound to ``start`` still starts once).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Tuple

import pygame

from gamekit.state_machine import GameMode


@dataclass(frozen=True)
class Action:
    name: str
    pos: Tuple[int, int] | None = None


Rule = Callable[[pygame.event.Event], Action | None]


def _key_rule(key: int, action: str, event_type=pygame.KEYDOWN) -> Rule:
    def _r(e: pygame.event.Event):
        if e.type == event_type and getattr(e, "key", None) == key:
            return Action(action)
        return None

    return _r


def _pointer_rule(button: int, action: str, event_type=pygame.MOUSEBUTTONDOWN) -> Rule:
    def _r(e: pygame.event.Event):
        if e.type == event_type and getattr(e, "button", None) == button:
            pos = getattr(e, "pos", None)
            return Action(action, tuple(pos) if pos is not None else None)
        return None

    return _r


class InputRouter:
    """Maps pygame events to semantic actions for the active mode."""

    def __init__(self, key_bindings: Dict[str, Dict[str, List[int]]] | None = None) -> None:
        if key_bindings is None:
            from gamekit.settings import settings

            key_bindings = settings.key_bindings
        self._rules: Dict[GameMode, List[Rule]] = {}
        self._register_default_rules(key_bindings)

    def _register_default_rules(self, key_bindings) -> None:
        def bind(keys, action, event_type=pygame.KEYDOWN):
            return [_key_rule(k, action, event_type) for k in keys]

        for mode in GameMode:
            binds = key_bindings.get(mode.name, {})
            rules: List[Rule] = []
            for act, keys in binds.items():
                if act in ("left", "right"):
                    # held movement: press starts, release stops
                    rules.extend(bind(keys, act, pygame.KEYDOWN))
                    rules.extend(bind(keys, "stop_" + act, pygame.KEYUP))
                else:
                    rules.extend(bind(keys, act))
            self._rules[mode] = rules

        self._rules[GameMode.MENU].append(_pointer_rule(1, "start"))
        self._rules[GameMode.PLAYING].append(_pointer_rule(1, "spawn_burst"))

    def process(self, events: Iterable[pygame.event.Event], mode: GameMode) -> List[Action]:
        rules = self._rules.get(mode, [])
        actions: List[Action] = []
        for e in events:
            for rule in rules:
                a = rule(e)
                if a:
                    if a not in actions:
                        actions.append(a)
                    break
        return actions


__all__ = ["InputRouter", "Action", "Rule"]
