import json
import os

import pygame

from gamekit.constants import MAX_PARTICLES, TARGET_FPS, WINDOW_SIZE
from gamekit.logger import get_logger

log = get_logger("settings")


def default_key_bindings():
    """Key bindings per game mode, stored as pygame key integers."""
    return {
        "MENU": {
            "start": [pygame.K_RETURN, pygame.K_KP_ENTER],
            "quit": [pygame.K_ESCAPE],
        },
        "PLAYING": {
            "end": [pygame.K_ESCAPE],
            "left": [pygame.K_LEFT, pygame.K_a],
            "right": [pygame.K_RIGHT, pygame.K_d],
            "launch": [pygame.K_SPACE],
        },
        "GAME_OVER": {
            "start": [pygame.K_RETURN, pygame.K_KP_ENTER],
            "restart": [pygame.K_r],
            "quit": [pygame.K_ESCAPE],
        },
    }


class Settings:
    SETTINGS_FILE = os.environ.get("GAMEKIT_SETTINGS_FILE", "data/settings.json")

    def __init__(self, path: str | None = None):
        self.path = path or self.SETTINGS_FILE
        self._sound_volume = 0.7
        self._fullscreen = False
        self.window_size = tuple(WINDOW_SIZE)
        self.fps = TARGET_FPS
        self.rng_seed = None
        self.max_particles = MAX_PARTICLES
        self._dirty = False
        self.key_bindings = default_key_bindings()
        self.load_settings()

    @property
    def sound_volume(self):
        return self._sound_volume

    @sound_volume.setter
    def sound_volume(self, value):
        new_val = max(0.0, min(1.0, round(value * 10) / 10))
        if new_val != self._sound_volume:
            self._sound_volume = new_val
            self._dirty = True
            self.flush()

    @property
    def fullscreen(self) -> bool:
        return self._fullscreen

    @fullscreen.setter
    def fullscreen(self, value: bool) -> None:
        new_val = bool(value)
        if new_val != self._fullscreen:
            self._fullscreen = new_val
            self._dirty = True
            self.flush()

    def load_settings(self):
        """Load settings from the JSON file, regenerating it when missing or corrupt."""
        if os.path.exists(self.path):
            try:
                with open(self.path, "r") as f:
                    data = json.load(f)
                self._sound_volume = data.get("sound_volume", self._sound_volume)
                self._fullscreen = bool(data.get("fullscreen", self._fullscreen))
                self.window_size = tuple(data.get("window_size", self.window_size))
                self.fps = int(data.get("fps", self.fps))
                self.rng_seed = data.get("rng_seed", self.rng_seed)
                self.max_particles = int(data.get("max_particles", self.max_particles))

                # Deep merge so bindings missing on disk keep their defaults
                loaded_bindings = data.get("key_bindings", {})
                for mode, binds in loaded_bindings.items():
                    if mode in self.key_bindings:
                        for action, keys in binds.items():
                            self.key_bindings[mode][action] = list(keys)
            except (json.JSONDecodeError, OSError, TypeError, ValueError) as e:
                log.warn("Error loading settings; regenerating", e)
                self._dirty = True
                self.flush()
        else:
            self._dirty = True
            self.flush()

    def save_settings(self):
        if self._dirty:
            self.flush()

    def flush(self):
        """Write settings to disk if dirty and clear dirty flag."""
        if not self._dirty:
            return
        data = {
            "sound_volume": self._sound_volume,
            "fullscreen": self._fullscreen,
            "window_size": list(self.window_size),
            "fps": self.fps,
            "rng_seed": self.rng_seed,
            "max_particles": self.max_particles,
            "key_bindings": self.key_bindings,
        }
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=4)
            self._dirty = False
            log.debug("Settings flushed")
        except OSError as e:
            log.error("Error saving settings", e)


settings = Settings()
