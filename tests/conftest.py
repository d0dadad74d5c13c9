import pytest

from digirain.attrs import CharAttr, ColorMode, ShadingMode


class RecordingDisplay:
    """Remembers every paint_cell call and the resulting grid."""

    def __init__(self):
        self.calls = []
        self.cells = {}

    def paint_cell(self, row, col, glyph, bold=False, color_pair=None):
        self.calls.append((row, col, glyph, bold, color_pair))
        self.cells[(row, col)] = glyph

    def erased_rows(self):
        return [row for row, _, glyph, _, _ in self.calls if glyph == " "]

    def painted_rows(self):
        return [row for row, _, glyph, _, _ in self.calls if glyph != " "]

    def clear_calls(self):
        self.calls = []


class FakeCloud:
    """Scriptable collaborator that records what droplets ask of it."""

    def __init__(self, lines=40, shading=ShadingMode.RANDOM, color=ColorMode.COLOR256):
        self.lines = lines
        self.shading = shading
        self.color = color
        self.spawn_notices = []
        self.char_requests = []
        self.attr_requests = []

    def visible_line_count(self):
        return self.lines

    def get_char(self, row, pool_index, offset):
        self.char_requests.append((row, pool_index, offset))
        return chr(ord("a") + row % 26)

    def shading_mode(self):
        return self.shading

    def color_mode(self):
        return self.color

    def get_attr(self, row, col, glyph, loc, now_ms, head_line, length):
        self.attr_requests.append((row, loc))
        return CharAttr(is_bold=False, color_pair=7)

    def notify_column_spawn_eligible(self, col, allowed):
        self.spawn_notices.append((col, allowed))


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def cloud():
    return FakeCloud()
