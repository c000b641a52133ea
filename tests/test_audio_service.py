import pytest

from gamekit.asset_manager import AssetManager
from gamekit.audio_service import BASE_VOLUMES, AudioService
from gamekit.settings import settings


class DummySound:
    def __init__(self):
        self.last_volume = None
        self.play_calls = 0

    def set_volume(self, v):
        self.last_volume = v

    def play(self, loops=0):
        self.play_calls += 1


@pytest.fixture
def service():
    sounds = {}

    def loader(path):
        snd = DummySound()
        sounds[path.rsplit("/", 1)[-1]] = snd
        return snd

    am = AssetManager(root="sfx-root", image_loader=lambda p: object(), sound_loader=loader)
    am.register_sound("hit", "hit.wav")
    am.register_sound("pop", "pop.wav")
    am.preload()
    return AudioService(am), sounds


def test_play_reaches_preloaded_sound(service):
    svc, sounds = service
    svc.play("hit")
    svc.play("hit")
    assert sounds["hit.wav"].play_calls == 2
    assert sounds["pop.wav"].play_calls == 0


def test_unknown_sound_is_ignored(service):
    svc, sounds = service
    svc.play("does-not-exist")
    assert all(s.play_calls == 0 for s in sounds.values())


def test_volume_follows_settings(service):
    svc, sounds = service
    original = settings.sound_volume
    try:
        svc.set_sound_volume(0.5)
        assert sounds["hit.wav"].last_volume == pytest.approx(0.5 * BASE_VOLUMES["hit"])
        assert sounds["pop.wav"].last_volume == pytest.approx(0.5 * BASE_VOLUMES["pop"])
    finally:
        settings.sound_volume = original


def test_service_requires_preloaded_assets():
    from gamekit.errors import AssetNotReadyError

    am = AssetManager(root="x", image_loader=lambda p: object(), sound_loader=lambda p: DummySound())
    am.register_sound("hit", "hit.wav")
    with pytest.raises(AssetNotReadyError):
        AudioService(am)
