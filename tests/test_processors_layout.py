from __future__ import annotations

import math

import pytest

from pdftextbox.components import InvalidGeometryError, LayoutBox, MeasurementError
from pdftextbox.processors.layout import (
    LayoutConfig,
    TextArea,
    layout_text,
    place_single_line,
    split_explicit_lines,
    wrap_text_lines,
)


def _ascent(font_name: str, font_size: float) -> float:
    return font_size * 0.9


class TestSplitExplicitLines:
    def test_crlf_and_lf_are_one_break_each(self):
        assert split_explicit_lines("a\r\nb\nc") == ["a", "b", "c"]

    def test_interior_blank_lines_preserved(self):
        assert split_explicit_lines("a\n\nb") == ["a", "", "b"]

    def test_trailing_breaks_dropped(self):
        assert split_explicit_lines("a\n\nb\n") == ["a", "", "b"]
        assert split_explicit_lines("ab\r\n\n") == ["ab"]

    @pytest.mark.parametrize("text", ["", "\n", "\r\n\n"])
    def test_empty_or_only_breaks_yield_one_empty_line(self, text):
        assert split_explicit_lines(text) == [""]

    def test_lone_cr(self):
        assert split_explicit_lines("a\rb") == ["a", "b"]


class TestWrapTextLines:
    def test_none_text(self, font_measure):
        assert wrap_text_lines(None, 100, font_measure) == []

    def test_trailing_newline_dropped(self, font_measure):
        assert wrap_text_lines("ab\n", 100, font_measure) == ["ab"]

    def test_no_width_only_splits_explicit_breaks(self, font_measure):
        assert wrap_text_lines("第一行\n second", None, font_measure) == ["第一行", " second"]

    def test_explicit_breaks_isolate_packing(self, font_measure):
        # 无论行宽多大，"ab" 与 "cd" 都不会合并
        for width in (1, 10, 1000):
            lines = wrap_text_lines("ab\ncd", width, font_measure, font_size=2)
            assert "abcd" not in lines
            assert "ab cd" not in lines
        assert wrap_text_lines("ab\ncd", 1000, font_measure, font_size=2) == ["ab", "cd"]

    def test_measure_receives_font_and_size(self):
        seen = []

        def measure(text, font_name, font_size):
            seen.append((font_name, font_size))
            return 0.0

        wrap_text_lines("a b", 10, measure, font_name="SimHei", font_size=9)
        assert seen and all(item == ("SimHei", 9) for item in seen)


class TestLayoutText:
    def test_baselines_step_by_leading(self, font_measure):
        # 字号 10，窄字符宽 5：区块宽 25 只放得下一个单词
        config = LayoutConfig(font_name="F", font_size=10, line_spacing=4)
        layout = layout_text("hello world\n\n中文", LayoutBox(72, 700, 25), config, font_measure)
        assert layout.texts == ["hello", "world", "", "中文"]
        assert [line.y for line in layout.lines] == [700, 686, 672, 658]
        assert all(line.x == 72 for line in layout.lines)
        assert layout.origin_y == 700
        assert layout.bottom_y == 658

    def test_consider_font_height_shifts_origin_not_box(self, font_measure):
        box = LayoutBox(0, 500, 100)
        config = LayoutConfig(font_name="F", font_size=10, consider_font_height=True)
        layout = layout_text("abc", box, config, font_measure, ascent=_ascent)
        assert math.isclose(layout.origin_y, 491)
        assert math.isclose(layout.lines[0].y, 491)
        assert layout.box is box
        assert box.y == 500

    def test_consider_font_height_requires_ascent(self, font_measure):
        config = LayoutConfig(font_name="F", font_size=10, consider_font_height=True)
        with pytest.raises(InvalidGeometryError):
            layout_text("abc", LayoutBox(0, 500, 100), config, font_measure)

    def test_ascent_ignored_when_disabled(self, font_measure):
        layout = layout_text("abc", LayoutBox(0, 500, 100), LayoutConfig(), font_measure, ascent=_ascent)
        assert layout.origin_y == 500

    @pytest.mark.parametrize("width", [0, -10])
    def test_invalid_width(self, font_measure, width):
        with pytest.raises(InvalidGeometryError):
            layout_text("abc", LayoutBox(0, 0, width), LayoutConfig(), font_measure)

    def test_measurement_failure_aborts_whole_call(self):
        def measure(text, font_name, font_size):
            if "bad" in text:
                raise KeyError(font_name)
            return 0.0

        with pytest.raises(MeasurementError):
            layout_text("good\nbad", LayoutBox(0, 0, 10), LayoutConfig(), measure)

    def test_empty_text_yields_one_empty_line(self, font_measure):
        layout = layout_text("", LayoutBox(0, 100, 10), LayoutConfig(), font_measure)
        assert layout.texts == [""]

    def test_trailing_newline_adds_no_line(self, font_measure):
        # 文本文件通常以换行结尾，不应多出一个空行
        config = LayoutConfig(font_name="F", font_size=10, line_spacing=2)
        layout = layout_text("ab\n", LayoutBox(0, 100, 50), config, font_measure)
        assert layout.texts == ["ab"]
        assert layout.bottom_y == 100


class TestTextArea:
    def test_resolve_config_overrides(self):
        default = LayoutConfig(font_name="F", font_size=12, line_spacing=2, consider_font_height=False)
        area = TextArea(text="x", x=1, y=2, width=3, font_size=9, consider_font_height=True)
        resolved = area.resolve_config(default)
        assert resolved == LayoutConfig(font_name="F", font_size=9, line_spacing=2, consider_font_height=True)
        assert area.box == LayoutBox(1, 2, 3)


def test_place_single_line():
    line = place_single_line("不换行 no wrap", 10, 20)
    assert (line.text, line.x, line.y) == ("不换行 no wrap", 10.0, 20.0)


def test_leading():
    assert LayoutConfig(font_size=12, line_spacing=3).leading == 15
