"""Application entry: preload barrier, then the frame-driven loop.

Startup order:
    1. pygame + mixer init
    2. register and preload every asset (abort on ``AssetLoadError``)
    3. build simulation, renderer, state machine and dispatcher
    4. loop: poll events -> route -> mode routine -> transition -> update -> render -> flip

The loop runs until the window closes, ``quit`` is requested, or
``max_frames`` frames have run (headless runs and smoke tests).
"""

from __future__ import annotations

import sys

import pygame

from gamekit.asset_manager import AssetManager
from gamekit.audio_service import AudioService, SilentAudio, init_mixer
from gamekit.constants import WINDOW_TITLE
from gamekit.entities import Bounds
from gamekit.errors import AssetLoadError
from gamekit.input_router import InputRouter
from gamekit.logger import get_logger
from gamekit.modes import build_dispatcher
from gamekit.renderer import Renderer
from gamekit.rng_service import RNGService
from gamekit.settings import settings
from gamekit.simulation import Simulation
from gamekit.state_machine import GameStateMachine

log = get_logger("app")

IMAGES = {"background": "background.bmp"}
SOUNDS = {"hit": "hit.wav", "pop": "pop.wav"}


def register_assets(assets: AssetManager, with_sounds: bool = True) -> None:
    for name, path in IMAGES.items():
        assets.register_image(name, path)
    if not with_sounds:
        return
    for name, path in SOUNDS.items():
        assets.register_sound(name, path)


def main(max_frames: int | None = None, assets: AssetManager | None = None) -> int:
    pygame.init()
    pygame.display.set_caption(WINDOW_TITLE)
    if settings.fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    else:
        screen = pygame.display.set_mode(settings.window_size)
    audio_ok = init_mixer()

    assets = assets or AssetManager.get()
    if not audio_ok:
        log.warn("no mixer available; sound effects disabled")
    register_assets(assets, with_sounds=audio_ok)
    try:
        assets.preload()
    except AssetLoadError as e:
        log.error("startup aborted:", e)
        pygame.quit()
        return 1

    RNGService.initialize(settings.rng_seed)
    audio = AudioService(assets) if audio_ok else SilentAudio()
    w, h = screen.get_size()
    sim = Simulation(Bounds(w, h), audio=audio, max_particles=settings.max_particles)
    renderer = Renderer(background=assets.image("background"))
    machine = GameStateMachine()
    dispatcher = build_dispatcher(machine, sim, renderer)
    router = InputRouter()
    clock = pygame.time.Clock()

    frames = 0
    running = True
    while running:
        events = pygame.event.get()
        for e in events:
            if e.type == pygame.QUIT:
                running = False

        actions = router.process(events, machine.current)
        if any(a.name == "quit" for a in actions):
            running = False
        dispatcher.handle_actions(actions)
        machine.handle_actions(a.name for a in actions)

        dt = clock.tick(settings.fps) / 1000.0
        dispatcher.update(dt)
        dispatcher.render(screen)
        pygame.display.flip()

        frames += 1
        if max_frames is not None and frames >= max_frames:
            running = False

    settings.save_settings()
    pygame.quit()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
