import os
import sys
from types import SimpleNamespace

import pytest

import main
from raycast.live_renderer import SimulationWindow

REPO_DIR = os.path.dirname(os.path.abspath(__file__))


def run_main(monkeypatch, *args):
    monkeypatch.chdir(REPO_DIR)
    monkeypatch.setattr(sys, "argv", ["main.py", *args])
    main.main()


def test_headless_run_prints_scene_and_hits(monkeypatch, capsys):
    run_main(monkeypatch, "--headless", "--seed", "3", "--x", "100", "--y", "50")

    out = capsys.readouterr().out
    assert "Scene ready: 16 walls, 36 rays, seed=3" in out
    assert "Hits from (100.0, 50.0)" in out


def test_headless_run_defaults_to_world_centre(monkeypatch, capsys):
    run_main(monkeypatch, "--headless", "--seed", "3")

    assert "Hits from (300.0, 300.0)" in capsys.readouterr().out


def test_headless_run_with_custom_config(monkeypatch, capsys, tmp_path):
    config_path = tmp_path / "scene.yaml"
    config_path.write_text("world:\n  width: 400\n  height: 200\nemitter:\n  num_rays: 4\n  angle_step_degrees: 90\n")

    run_main(monkeypatch, "--headless", "--config", str(config_path), "--seed", "1")

    out = capsys.readouterr().out
    assert "4 rays, seed=1" in out
    assert "Hits from (200.0, 100.0)" in out


def test_to_screen_flips_y():
    window = SimpleNamespace(height=600)
    assert SimulationWindow.to_screen(window, 100, 50) == (100, 550)


def test_mouse_motion_uses_world_frame():
    window = SimpleNamespace(height=600, cursor_pos=None)

    SimulationWindow.on_mouse_motion(window, 100, 550, 0, 0)
    assert window.cursor_pos == (100, 50)

    # Back to the same screen point
    assert SimulationWindow.to_screen(window, *window.cursor_pos) == (100, 550)


def test_main_is_not_installed_as_a_module():
    tomllib = pytest.importorskip("tomllib")
    with open(os.path.join(REPO_DIR, "pyproject.toml"), "rb") as f:
        setuptools_config = tomllib.load(f)["tool"]["setuptools"]

    assert setuptools_config["packages"] == ["raycast"]
    assert "py-modules" not in setuptools_config
