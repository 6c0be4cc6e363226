"""Shared fixtures.

The test layout uses a monospace font of size 10 with ratios 1.0 and 2.0:
every character is 10 units wide and every line 20 units tall. With a
window width of 50 and no margin exactly five characters fit on a line.
"""

import pytest

from wrapedit.font_config import FontSpec
from wrapedit.metrics import MonospaceMetrics
from wrapedit.model import TextModel


@pytest.fixture
def make_model():
    def _make(width=50, height=100, view=None, text=None):
        model = TextModel(
            view,
            metrics=MonospaceMetrics(width_ratio=1.0, height_ratio=2.0),
            font=FontSpec("Courier", 10, monospace=True),
            window_width=width,
            window_height=height,
            start_x=0.0,
            start_y=0.0,
            margin=0,
        )
        if text:
            model.load_text(text)
        return model
    return _make


@pytest.fixture
def model(make_model):
    return make_model()


@pytest.fixture
def type_text():
    def _type(model, text):
        for char in text:
            model.insert_char(char)
    return _type
