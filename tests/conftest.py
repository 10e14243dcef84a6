import pytest

from neomatrix.models.color import Color
from neomatrix.models.config import EditorConfig
from neomatrix.models.domain import Animation, Frame, GridConfig, Pixel
from neomatrix.models.enums import Orientation
from neomatrix.services.editor_service import EditorService


RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)


def make_frame(name, *cells):
    """Frame from (row, col, color) tuples"""
    return Frame(name=name, coords=[Pixel(row=r, col=c, color=color) for r, c, color in cells])


def make_animation(frames=None, width=8, height=8, orientation=Orientation.TOP_LEFT, step_delay_ms=200):
    return Animation(
        grid=GridConfig(width=width, height=height, orientation=orientation),
        frames=frames or [Frame(name="Frame 1")],
        current_index=0,
        draw_color=RED,
        step_delay_ms=step_delay_ms,
    )


@pytest.fixture
def config():
    return EditorConfig()


@pytest.fixture
def two_pixel_animation():
    """8x8, one frame: red at (0, 0), green at (1, 1)"""
    return make_animation([make_frame("Frame 1", (0, 0, RED), (1, 1, GREEN))])


@pytest.fixture
def editor(config):
    return EditorService(config=config)


@pytest.fixture
def changes(editor):
    """Records every EditorChange the editor publishes"""
    received = []
    editor.subscribe(lambda change, animation: received.append(change))
    return received
