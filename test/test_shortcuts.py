"""
Tests for keyboard shortcut routing in the GUI
"""

import pytest

tk = pytest.importorskip("tkinter")
pytest.importorskip("PIL.ImageTk")

from tkinter import ttk  # noqa: E402

from tapmeasure import ignores_shortcuts  # noqa: E402


# Widgets are created without a Tk root, so no display is needed
def bare(widget_class):
    return widget_class.__new__(widget_class)


@pytest.mark.parametrize("widget_class", [tk.Entry, ttk.Entry, ttk.Spinbox])
def test_entry_widgets_ignore_shortcuts(widget_class):
    assert ignores_shortcuts(bare(widget_class))


@pytest.mark.parametrize("widget_class", [tk.Canvas, tk.Tk, ttk.Button])
def test_other_widgets_take_shortcuts(widget_class):
    assert not ignores_shortcuts(bare(widget_class))
