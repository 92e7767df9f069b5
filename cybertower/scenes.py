"""The menu scenes of the game and the manager that switches between them."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cybertower.game import DANGER_TIME, PlayState
from cybertower.keys import Key
from cybertower.scoreboard import (
    NameEntry,
    ScoreEntry,
    Scoreboard,
    append_score,
    compute_score,
)
from cybertower.tilemap import load_map
from cybertower.ui import Button, Slider
from cybertower.waves import load_waves

SCREEN_WIDTH = 1600
SCREEN_HEIGHT = 832
START_SCENE = "start"
MENU_MUSIC = "Gamble.mp3"
SCOREBOARD_FILE = "scoreboard.txt"


@dataclass
class AudioSettings:
    """Volumes shared by every scene, each in [0, 1]."""

    bgm_volume: float = 1.0
    sfx_volume: float = 1.0


class _Scene:
    """Common behaviour of a scene: a manager link and a list of controls."""

    def __init__(self) -> None:
        self.manager: SceneManager | None = None
        self.controls: list[Button] = []

    @property
    def _manager(self) -> SceneManager:
        if self.manager is None:
            raise RuntimeError("scene is not attached to a scene manager")
        return self.manager

    def _half_size(self) -> tuple[int, int]:
        width, height = self._manager.screen_size
        return width // 2, height // 2

    def initialize(self) -> None:
        """Build the scene when it becomes active."""

    def terminate(self) -> None:
        """Release what the scene built when it stops being active."""
        self.controls.clear()

    def update(self, delta_time: float) -> None:
        """Advance the scene by one frame."""

    def key_down(self, key: int) -> None:
        """React to a key press."""

    def on_mouse_move(self, mx: float, my: float) -> None:
        for control in list(self.controls):
            control.on_mouse_move(mx, my)

    def on_mouse_down(self, button: int, mx: float, my: float) -> None:
        for control in list(self.controls):
            control.on_mouse_down(button, mx, my)

    def on_mouse_up(self, button: int, mx: float, my: float) -> None:
        for control in list(self.controls):
            release = getattr(control, "on_mouse_up", None)
            if release is not None:
                release(button, mx, my)


class SceneManager:
    """Holds the named scenes and keeps exactly one of them active."""

    def __init__(
        self,
        screen_size: tuple[int, int] = (SCREEN_WIDTH, SCREEN_HEIGHT),
        resource_dir: str | Path = "Resource",
    ) -> None:
        self.screen_size = screen_size
        self.resource_dir = Path(resource_dir)
        self.audio = AudioSettings()
        self.scenes: dict[str, _Scene] = {}
        self.active_name: str | None = None

    @property
    def active(self) -> _Scene | None:
        """The scene currently shown, if any."""
        return None if self.active_name is None else self.scenes[self.active_name]

    def add_scene(self, name: str, scene: _Scene) -> None:
        """Register a scene under a unique name."""
        if name in self.scenes:
            raise ValueError(f"scene {name!r} is already registered")
        scene.manager = self
        self.scenes[name] = scene

    def get_scene(self, name: str) -> _Scene:
        """Return a registered scene."""
        try:
            return self.scenes[name]
        except KeyError:
            raise KeyError(f"no scene named {name!r}") from None

    def change_scene(self, name: str) -> _Scene:
        """Terminate the active scene and initialize the named one."""
        scene = self.get_scene(name)
        current = self.active
        if current is not None:
            current.terminate()
        self.active_name = name
        scene.initialize()
        return scene


class StartScene(_Scene):
    """The title screen with Play and Settings buttons."""

    def initialize(self) -> None:
        half_w, half_h = self._half_size()
        self.controls = [
            Button(half_w - 200, half_h // 2 + 200, 400, 100, self.play_on_click),
            Button(half_w - 200, half_h * 3 // 2 - 50, 400, 100, self.settings_on_click),
        ]

    def play_on_click(self) -> None:
        self._manager.change_scene("stage-select")

    def settings_on_click(self) -> None:
        self._manager.change_scene("settings")


class StageSelectScene(_Scene):
    """Lets the player pick a stage, open the scoreboard or go back."""

    def __init__(self) -> None:
        super().__init__()
        self.bgm: str | None = None

    def initialize(self) -> None:
        half_w, half_h = self._half_size()
        self.controls = [
            Button(half_w - 200, half_h // 2 - 50, 400, 100, lambda: self.play_on_click(1)),
            Button(half_w - 200, half_h // 2 + 100, 400, 100, lambda: self.play_on_click(2)),
            Button(half_w - 200, half_h // 2 + 500, 400, 100, self.back_on_click),
            Button(half_w - 200, half_h // 2 + 250, 400, 100, self.scoreboard_on_click),
        ]
        if self.bgm is None:
            self.bgm = MENU_MUSIC

    def terminate(self) -> None:
        self.bgm = None
        super().terminate()

    def play_on_click(self, stage: int) -> None:
        play = self._manager.get_scene("play")
        play.map_id = stage  # type: ignore[attr-defined]
        self.bgm = None
        self._manager.change_scene("play")

    def scoreboard_on_click(self) -> None:
        self._manager.change_scene("scoreboard")

    def back_on_click(self) -> None:
        self._manager.change_scene(START_SCENE)


class SettingsScene(_Scene):
    """Volume sliders for music and sound effects."""

    def __init__(self) -> None:
        super().__init__()
        self.bgm: str | None = None
        self.bgm_volume = 0.0
        self.bgm_slider: Slider | None = None
        self.sfx_slider: Slider | None = None

    def initialize(self) -> None:
        half_w, half_h = self._half_size()
        back = Button(half_w - 200, half_h * 3 // 2 - 50, 400, 100, self.back_on_click)
        self.bgm_slider = Slider(40 + half_w - 95, half_h - 50 - 2, 190, 4, self.bgm_changed)
        self.sfx_slider = Slider(40 + half_w - 95, half_h + 50 - 2, 190, 4, self.sfx_changed)
        self.controls = [back, self.bgm_slider, self.sfx_slider]
        audio = self._manager.audio
        self.bgm = MENU_MUSIC
        self.bgm_volume = audio.bgm_volume
        self.bgm_slider.set_value(audio.bgm_volume)
        self.sfx_slider.set_value(audio.sfx_volume)

    def terminate(self) -> None:
        self.bgm = None
        self.bgm_slider = None
        self.sfx_slider = None
        super().terminate()

    def bgm_changed(self, value: float) -> None:
        self.bgm_volume = value
        self._manager.audio.bgm_volume = value

    def sfx_changed(self, value: float) -> None:
        self._manager.audio.sfx_volume = value

    def back_on_click(self) -> None:
        self._manager.change_scene(START_SCENE)


class LoseScene(_Scene):
    """Shown when the player runs out of lives."""

    def __init__(self) -> None:
        super().__init__()
        self.bgm: str | None = None
        self.bgm_position = 0.0

    def initialize(self) -> None:
        half_w, half_h = self._half_size()
        self.controls = [
            Button(half_w - 200, half_h * 7 // 4 - 50, 400, 100, self.back_on_click)
        ]
        self.bgm = "astronomia.ogg"
        self.bgm_position = DANGER_TIME

    def terminate(self) -> None:
        self.bgm = None
        super().terminate()

    def back_on_click(self) -> None:
        self._manager.change_scene("stage-select")


class WinScene(_Scene):
    """Shown after a stage is cleared; records the player's name and score."""

    def __init__(self) -> None:
        super().__init__()
        self.ticks = 0.0
        self.bgm: str | None = None
        self.name_entry = NameEntry()

    @property
    def scoreboard_path(self) -> Path:
        return self._manager.resource_dir / SCOREBOARD_FILE

    def initialize(self) -> None:
        self.ticks = 0.0
        half_w, half_h = self._half_size()
        self.controls = [
            Button(half_w - 200, half_h * 7 // 4 - 50, 400, 100, self.back_on_click)
        ]
        self.bgm = "win.wav"

    def terminate(self) -> None:
        super().terminate()
        self.bgm = None

    def update(self, delta_time: float) -> None:
        self.ticks += delta_time
        if 4 < self.ticks < 100 and getattr(self._manager.get_scene("play"), "map_id", None) == 2:
            self.ticks = 100.0
            self.bgm = "happy.ogg"

    def key_down(self, key: int) -> str:
        """Type into the player's name and return it."""
        return self.name_entry.press(key)

    def back_on_click(self, today: _dt.date | None = None) -> ScoreEntry:
        """Append the score of the won stage to the scoreboard and return to stage select."""
        state = getattr(self._manager.get_scene("play"), "state", None)
        score = 0
        if state is not None:
            score = compute_score(state.kill_count, state.money, state.lives)
        self.name_entry.name = self.name_entry.final_name()
        day = today if today is not None else _dt.date.today()
        entry = ScoreEntry(self.name_entry.name, score, day.strftime("%Y-%m-%d"))
        append_score(self.scoreboard_path, entry)
        self._manager.change_scene("stage-select")
        return entry


class _PlayScene(_Scene):
    """Loads the chosen stage into a play state."""

    def __init__(self) -> None:
        super().__init__()
        self.map_id = 1
        self.state: PlayState | None = None

    def initialize(self) -> None:
        resources = self._manager.resource_dir
        tilemap = load_map(resources / f"map{self.map_id}.txt")
        waves = load_waves(resources / f"enemy{self.map_id}.txt")
        self.state = PlayState(tilemap, waves, self.map_id)

    def update(self, delta_time: float) -> None:
        if self.state is None:
            return
        self.state.tick(delta_time)
        if self.state.next_scene is not None:
            self._manager.change_scene(self.state.next_scene)

    def key_down(self, key: int) -> None:
        if self.state is not None:
            self.state.key_down(key, self.state.last_key_time + 1.0)


class _ScoreboardScene(_Scene):
    """Pages through the recorded scores."""

    def __init__(self) -> None:
        super().__init__()
        self.board = Scoreboard()

    def initialize(self) -> None:
        self.board = Scoreboard.load(self._manager.resource_dir / SCOREBOARD_FILE)

    def key_down(self, key: int) -> Any:
        if key == Key.LEFT:
            self.board.prev_page()
        elif key == Key.RIGHT:
            self.board.next_page()
        elif key == Key.ESCAPE:
            self._manager.change_scene("stage-select")


def build_game() -> SceneManager:
    """Register every scene and open the title screen."""
    manager = SceneManager()
    manager.add_scene("stage-select", StageSelectScene())
    manager.add_scene("play", _PlayScene())
    manager.add_scene("lose", LoseScene())
    manager.add_scene("win", WinScene())
    manager.add_scene(START_SCENE, StartScene())
    manager.add_scene("settings", SettingsScene())
    manager.add_scene("scoreboard", _ScoreboardScene())
    manager.change_scene(START_SCENE)
    return manager