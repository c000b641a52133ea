"""Mode routines for the demo: one ``State`` per ``GameMode``.

``build_dispatcher`` wires the three routines to a machine; the
dispatcher checks that every mode is covered.
"""

from __future__ import annotations

from typing import Sequence

import pygame

from gamekit.renderer import Renderer
from gamekit.simulation import Simulation
from gamekit.state_machine import GameMode, GameStateMachine, ModeDispatcher, State


class MenuMode(State):
    mode = GameMode.MENU

    def __init__(self, renderer: Renderer) -> None:
        self.renderer = renderer

    def render(self, surface: pygame.Surface) -> None:
        self.renderer.draw_menu(surface)


class PlayingMode(State):
    mode = GameMode.PLAYING

    def __init__(self, sim: Simulation, renderer: Renderer) -> None:
        self.sim = sim
        self.renderer = renderer

    def on_enter(self, previous: GameMode | None) -> None:
        # Every way into PLAYING (start or restart) begins a fresh scene
        self.sim.reset()

    def on_exit(self, next_mode: GameMode) -> None:
        self.sim.set_movement(left=False, right=False)

    def handle_actions(self, actions: Sequence) -> None:
        for act in actions:
            name = act.name
            if name == "left":
                self.sim.set_movement(left=True)
            elif name == "stop_left":
                self.sim.set_movement(left=False)
            elif name == "right":
                self.sim.set_movement(right=True)
            elif name == "stop_right":
                self.sim.set_movement(right=False)
            elif name == "launch":
                self.sim.launch_ball()
            elif name == "spawn_burst" and act.pos is not None:
                self.sim.spawn_burst(act.pos)

    def update(self, dt: float) -> None:
        self.sim.step()

    def render(self, surface: pygame.Surface) -> None:
        self.renderer.draw_world(surface, self.sim)


class GameOverMode(State):
    mode = GameMode.GAME_OVER

    def __init__(self, sim: Simulation, renderer: Renderer) -> None:
        self.sim = sim
        self.renderer = renderer

    def render(self, surface: pygame.Surface) -> None:
        # World stays frozen under the banner; no ticks run here
        self.renderer.draw_game_over(surface, self.sim)


def build_dispatcher(machine: GameStateMachine, sim: Simulation, renderer: Renderer) -> ModeDispatcher:
    return ModeDispatcher(
        machine,
        {
            GameMode.MENU: MenuMode(renderer),
            GameMode.PLAYING: PlayingMode(sim, renderer),
            GameMode.GAME_OVER: GameOverMode(sim, renderer),
        },
    )


__all__ = ["MenuMode", "PlayingMode", "GameOverMode", "build_dispatcher"]
