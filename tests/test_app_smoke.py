from pathlib import Path

import app
from gamekit.asset_manager import AssetManager
from gamekit.state_machine import GameMode

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def test_main_runs_a_few_frames_headless():
    assert app.main(max_frames=3, assets=AssetManager(root=str(DATA_DIR))) == 0


def test_main_aborts_before_loop_when_preload_fails(tmp_path, monkeypatch):
    entered = []
    monkeypatch.setattr(app, "build_dispatcher", lambda *a, **k: entered.append(True))
    assert app.main(max_frames=1, assets=AssetManager(root=str(tmp_path))) == 1
    assert entered == []


def test_menu_enter_starts_play_and_resets_scene():
    from gamekit.entities import Bounds
    from gamekit.modes import build_dispatcher
    from gamekit.renderer import Renderer
    from gamekit.rng_service import RNGService
    from gamekit.simulation import Simulation
    from gamekit.state_machine import GameStateMachine

    sim = Simulation(Bounds(200, 200), rng=RNGService(1))
    machine = GameStateMachine()
    dispatcher = build_dispatcher(machine, sim, Renderer())
    assert sim.entities == []
    machine.handle_action("start")
    assert machine.current is GameMode.PLAYING
    assert len(sim.entities) == 2
    dispatcher.update(1 / 60)
    assert sim.ctx.tick == 1
    machine.handle_action("end")
    dispatcher.update(1 / 60)
    # frozen while in GAME_OVER
    assert sim.ctx.tick == 1


def test_main_falls_back_to_silent_audio_without_mixer(monkeypatch):
    import pygame

    def no_mixer():
        pygame.mixer.quit()
        return False

    monkeypatch.setattr(app, "init_mixer", no_mixer)
    assets = AssetManager(root=str(DATA_DIR))
    assert app.main(max_frames=2, assets=assets) == 0
    assert assets.sound_names() == []
