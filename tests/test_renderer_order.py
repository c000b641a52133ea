import pygame
import pytest

from gamekit.entities import Bounds
from gamekit.renderer import Renderer
from gamekit.rng_service import RNGService
from gamekit.simulation import Simulation


@pytest.fixture(scope="module")
def pygame_init():
    pygame.init()
    yield
    pygame.quit()


def make_sim():
    sim = Simulation(Bounds(320, 240), rng=RNGService(5))
    sim.reset()
    sim.spawn_burst((100, 100), 10)
    sim.step()
    return sim


def test_world_layer_order(pygame_init):
    r = Renderer()
    surface = pygame.Surface((320, 240))
    seq = []
    r.draw_world(surface, make_sim(), capture_sequence=seq)
    assert seq == ["clear", "obstacles", "entities", "particles", "hud"]


def test_hud_can_be_disabled(pygame_init):
    r = Renderer(show_hud=False)
    seq = []
    r.draw_world(pygame.Surface((320, 240)), make_sim(), capture_sequence=seq)
    assert "hud" not in seq


def test_game_over_draws_world_then_banner(pygame_init):
    r = Renderer()
    seq = []
    r.draw_game_over(pygame.Surface((320, 240)), make_sim(), capture_sequence=seq)
    assert seq[0] == "clear"
    assert seq[-1] == "game_over"


def test_menu_and_background_scaling(pygame_init):
    bg = pygame.Surface((2, 2))
    bg.fill((10, 20, 30))
    r = Renderer(background=bg)
    surface = pygame.Surface((64, 48))
    seq = []
    r.draw_menu(surface, capture_sequence=seq)
    assert seq == ["clear", "menu"]
    assert r.background.get_size() == (64, 48)
    assert surface.get_at((0, 0))[:3] == (10, 20, 30)


def test_ball_pixels_are_drawn(pygame_init):
    sim = Simulation(Bounds(100, 100), obstacles=[], rng=RNGService(0))
    from gamekit.entities import make_ball

    ball = make_ball(50, 50, radius=6)
    sim.entities.append(ball)
    surface = pygame.Surface((100, 100))
    Renderer(show_hud=False).draw_world(surface, sim)
    assert surface.get_at((50, 50))[:3] == ball.payload.color
