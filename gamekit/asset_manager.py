"""AssetManager: two-phase image and sound loading.

Assets are *registered* by name first and then loaded together by
``preload()``, which is the barrier the driver must pass before the
first tick. After a successful preload every registered name resolves
to a loaded handle, so the update and render code never sees ``None``.

- ``preload`` attempts every asset and reports all failures at once via
  ``AssetLoadError`` instead of stopping at the first.
- Accessing an asset before the barrier raises ``AssetNotReadyError``.
- Loaders are injectable so tests can run without files or a mixer.
"""

from __future__ import annotations

import os
from typing import Callable, Dict

import pygame

from gamekit.errors import AssetLoadError, AssetNotReadyError
from gamekit.logger import get_logger

_log = get_logger("assets")

ASSET_ROOT = os.environ.get("GAMEKIT_ASSET_ROOT", "data")
IMG_DIR = "images"
SFX_DIR = "sfx"


def load_image(path: str) -> pygame.Surface:
    raw = pygame.image.load(path)
    # convert() needs a display mode; headless runs keep the file format
    if pygame.display.get_init() and pygame.display.get_surface():
        raw = raw.convert_alpha()
    return raw


def load_sound(path: str) -> pygame.mixer.Sound:
    return pygame.mixer.Sound(path)


class AssetManager:
    _instance: "AssetManager | None" = None

    def __init__(
        self,
        root: str = ASSET_ROOT,
        image_loader: Callable[[str], object] = load_image,
        sound_loader: Callable[[str], object] = load_sound,
    ) -> None:
        self.root = root
        self._image_loader = image_loader
        self._sound_loader = sound_loader
        self._image_paths: Dict[str, str] = {}
        self._sound_paths: Dict[str, str] = {}
        self._images: Dict[str, object] = {}
        self._sounds: Dict[str, object] = {}
        self._ready = False

    @classmethod
    def get(cls) -> "AssetManager":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def ready(self) -> bool:
        return self._ready

    # Registration -------------------------------------------------------
    def register_image(self, name: str, rel_path: str) -> None:
        self._image_paths[name] = os.path.join(self.root, IMG_DIR, rel_path)
        self._ready = False

    def register_sound(self, name: str, rel_path: str) -> None:
        self._sound_paths[name] = os.path.join(self.root, SFX_DIR, rel_path)
        self._ready = False

    # Preload barrier ----------------------------------------------------
    def preload(self) -> None:
        """Load everything registered; raises ``AssetLoadError`` listing each failure."""
        failures: Dict[str, str] = {}
        for name, path in self._image_paths.items():
            if name in self._images:
                continue
            try:
                self._images[name] = self._image_loader(path)
            except (pygame.error, OSError) as e:
                failures[f"image:{name}"] = f"{path}: {e}"
        for name, path in self._sound_paths.items():
            if name in self._sounds:
                continue
            try:
                self._sounds[name] = self._sound_loader(path)
            except (pygame.error, OSError) as e:
                failures[f"sound:{name}"] = f"{path}: {e}"
        if failures:
            for key, msg in failures.items():
                _log.error("asset load failed", key, msg)
            raise AssetLoadError(failures)
        self._ready = True
        _log.info("preload complete:", len(self._images), "images,", len(self._sounds), "sounds")

    # Access -------------------------------------------------------------
    def _require_ready(self, name: str) -> None:
        if not self._ready:
            raise AssetNotReadyError(f"asset {name!r} requested before preload()")

    def image(self, name: str):
        self._require_ready(name)
        return self._images[name]

    def sound(self, name: str):
        self._require_ready(name)
        return self._sounds[name]

    def sound_names(self):
        return list(self._sounds)


__all__ = ["AssetManager", "load_image", "load_sound"]
