"""Render collaborator.

Draws the simulation state with pygame primitives; it never mutates
entities. Layer order for a world frame (bottom -> top):

1. clear (background colour or image)
2. obstacles
3. entities (player rect, ball circles)
4. particles (alpha layer)
5. HUD text

``capture_sequence`` records the executed layers so tests can check
ordering without sampling pixels.
"""

from __future__ import annotations

from typing import List, Optional

import pygame

from gamekit.constants import (
    BACKGROUND_COLOR,
    OBSTACLE_COLOR,
    PLAYER_COLOR,
    TEXT_COLOR,
)
from gamekit.entities import EntityKind


class Renderer:
    def __init__(self, background: pygame.Surface | None = None, show_hud: bool = True) -> None:
        self.background = background
        self.show_hud = show_hud
        self._fonts: dict[int, pygame.font.Font] = {}
        self._particle_layer: pygame.Surface | None = None

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def _text(self, surface: pygame.Surface, text: str, size: int, center) -> None:
        img = self._font(size).render(text, True, TEXT_COLOR)
        surface.blit(img, img.get_rect(center=center))

    def clear(self, surface: pygame.Surface) -> None:
        if self.background is not None:
            if self.background.get_size() != surface.get_size():
                self.background = pygame.transform.scale(self.background, surface.get_size())
            surface.blit(self.background, (0, 0))
        else:
            surface.fill(BACKGROUND_COLOR)

    def draw_world(self, surface: pygame.Surface, sim, capture_sequence: Optional[List[str]] = None) -> None:
        seq = capture_sequence
        self.clear(surface)
        if seq is not None:
            seq.append("clear")

        for ob in sim.ctx.obstacles:
            pygame.draw.rect(surface, OBSTACLE_COLOR, pygame.Rect(ob.x, ob.y, ob.width, ob.height))
        if seq is not None:
            seq.append("obstacles")

        particles = []
        for e in sim.entities:
            if e.kind is EntityKind.PLAYER:
                pygame.draw.rect(surface, PLAYER_COLOR, pygame.Rect(*e.rect()))
            elif e.kind is EntityKind.BALL:
                pygame.draw.circle(surface, e.payload.color, (round(e.x), round(e.y)), round(e.radius))
            else:
                particles.append(e)
        if seq is not None:
            seq.append("entities")

        if particles:
            layer = self._layer_for(surface)
            layer.fill((0, 0, 0, 0))
            for p in particles:
                r, g, b = p.payload.color
                a = int(max(0, min(255, p.payload.alpha)))
                pygame.draw.circle(layer, (r, g, b, a), (round(p.x), round(p.y)), max(1, round(p.radius)))
            surface.blit(layer, (0, 0))
        if seq is not None:
            seq.append("particles")

        if self.show_hud:
            self.draw_hud(surface, sim)
            if seq is not None:
                seq.append("hud")

    def _layer_for(self, surface: pygame.Surface) -> pygame.Surface:
        if self._particle_layer is None or self._particle_layer.get_size() != surface.get_size():
            self._particle_layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        return self._particle_layer

    def draw_hud(self, surface: pygame.Surface, sim) -> None:
        summary = sim.last_summary
        tick = summary.tick if summary else 0
        text = f"tick {tick}  entities {len(sim.entities)}  particles {len(sim.particle_system)}"
        img = self._font(22).render(text, True, TEXT_COLOR)
        surface.blit(img, (10, 10))

    def draw_menu(self, surface: pygame.Surface, capture_sequence: Optional[List[str]] = None) -> None:
        self.clear(surface)
        w, h = surface.get_size()
        self._text(surface, "gamekit", 64, (w // 2, h // 3))
        self._text(surface, "ENTER to play  /  ESC to quit", 28, (w // 2, h // 2))
        if capture_sequence is not None:
            capture_sequence.extend(["clear", "menu"])

    def draw_game_over(self, surface: pygame.Surface, sim, capture_sequence: Optional[List[str]] = None) -> None:
        self.draw_world(surface, sim, capture_sequence)
        shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 160))
        surface.blit(shade, (0, 0))
        w, h = surface.get_size()
        self._text(surface, "GAME OVER", 64, (w // 2, h // 3))
        self._text(surface, "R to restart  /  ENTER for menu", 28, (w // 2, h // 2))
        if capture_sequence is not None:
            capture_sequence.append("game_over")


__all__ = ["Renderer"]
