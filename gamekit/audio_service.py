"""AudioService: fire-and-forget sound effects.

Wraps the sound handles resolved by ``AssetManager.preload`` behind a
``play(name)`` call and keeps their volume in sync with
``settings.sound_volume``. Nothing waits on playback completion.
"""

from __future__ import annotations

import os
from typing import Dict

import pygame

from gamekit.asset_manager import AssetManager
from gamekit.logger import get_logger
from gamekit.settings import settings

_log = get_logger("audio")

# Per-effect mix relative to the global sound volume
BASE_VOLUMES = {"hit": 0.8, "pop": 0.5}


def init_mixer() -> bool:
    """Initialise pygame.mixer, falling back to SDL's dummy audio driver.

    Returns False when no mixer could be opened at all.
    """
    if not pygame.get_init():
        pygame.init()
    if pygame.mixer.get_init():
        return True
    try:
        pygame.mixer.init()
        return True
    except pygame.error as e:
        _log.warn("mixer init failed, retrying with dummy driver:", e)
    os.environ["SDL_AUDIODRIVER"] = "dummy"
    try:
        pygame.mixer.init()
        return True
    except pygame.error as e:
        _log.error("no audio available:", e)
        return False


class AudioService:
    def __init__(self, assets: AssetManager) -> None:
        self._sfx: Dict[str, pygame.mixer.Sound] = {name: assets.sound(name) for name in assets.sound_names()}
        self._missing_logged: set[str] = set()
        self.apply_volumes()

    def apply_volumes(self) -> None:
        sound_v = settings.sound_volume
        for name, snd in self._sfx.items():
            snd.set_volume(sound_v * BASE_VOLUMES.get(name, 1.0))

    def set_sound_volume(self, v: float) -> None:
        settings.sound_volume = v
        self.apply_volumes()

    def play(self, name: str, loops: int = 0) -> None:
        snd = self._sfx.get(name)
        if snd is None:
            if name not in self._missing_logged:
                _log.warn("unknown sound", name)
                self._missing_logged.add(name)
            return
        snd.play(loops)


class SilentAudio:
    """Audio port used when the mixer is unavailable or in headless runs."""

    def play(self, name: str, loops: int = 0) -> None:
        pass


__all__ = ["AudioService", "SilentAudio", "init_mixer", "BASE_VOLUMES"]
