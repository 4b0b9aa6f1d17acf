from __future__ import annotations

import pytest

from pdftextbox.components import InvalidGeometryError, MeasurementError, pack_segment


class TestPackSegmentBasics:
    def test_empty_segment_yields_one_empty_line(self, char_count_measure):
        assert pack_segment("", 10, char_count_measure) == [""]

    def test_fits_in_one_line(self, char_count_measure):
        assert pack_segment("hello world", 20, char_count_measure) == ["hello world"]

    def test_space_preferred_break(self, char_count_measure):
        # 宽度 5 放得下 "hello"，放不下 "hello world"
        assert pack_segment("hello world", 5, char_count_measure) == ["hello", "world"]

    def test_never_splits_inside_word(self, char_count_measure):
        lines = pack_segment("the quick brown fox", 9, char_count_measure)
        assert lines == ["the quick", "brown fox"]

    def test_script_transition_breaks(self, narrow_wide_measure):
        assert pack_segment("I服了u", 1, narrow_wide_measure) == ["I", "服", "了", "u"]

    def test_cjk_breaks_at_any_char(self, narrow_wide_measure):
        # 每个中文宽 2，行宽 4 -> 每行两个字
        assert pack_segment("测试文本", 4, narrow_wide_measure) == ["测试", "文本"]

    def test_mixed_latin_run_stays_whole(self, narrow_wide_measure):
        # "PDF" 宽 3，不会在字母之间断开
        assert pack_segment("输出PDF文件", 4, narrow_wide_measure) == ["输出", "PDF", "文件"]

    def test_interior_spaces_kept_in_line(self, char_count_measure):
        assert pack_segment("a  b  c", 4, char_count_measure) == ["a  b", "c"]


class TestForcedAccept:
    def test_single_wide_char_wider_than_box(self, narrow_wide_measure):
        # 单个中文宽 2 > 行宽 1，仍独占一行
        assert pack_segment("测试", 1, narrow_wide_measure) == ["测", "试"]

    def test_long_word_is_emitted_verbatim(self, char_count_measure):
        assert pack_segment("supercalifragilistic is long", 5, char_count_measure) == [
            "supercalifragilistic",
            "is",
            "long",
        ]

    def test_leading_spaces_do_not_produce_blank_line(self, char_count_measure):
        assert pack_segment("  superlong", 3, char_count_measure) == ["superlong"]


class TestTrimming:
    def test_final_line_kept_as_is(self, char_count_measure):
        # 最后一行不裁剪，保持原样
        assert pack_segment("  indented", 20, char_count_measure) == ["  indented"]

    def test_break_point_whitespace_trimmed(self, char_count_measure):
        assert pack_segment("ab   cd", 3, char_count_measure) == ["ab", "cd"]

    def test_whitespace_only_segment(self, char_count_measure):
        assert pack_segment("   ", 5, char_count_measure) == ["   "]


class TestProperties:
    @pytest.mark.parametrize("width", [1, 2, 3, 5, 8, 13])
    def test_terminates_and_preserves_content(self, narrow_wide_measure, width):
        text = "Hello 世界, this is 中英混排 text with 长长的句子 and words."
        lines = pack_segment(text, width, narrow_wide_measure)
        assert len(lines) >= 1
        assert "".join(lines).replace(" ", "") == text.replace(" ", "")

    @pytest.mark.parametrize("width", [4, 6, 10, 16])
    def test_width_bound_except_forced(self, narrow_wide_measure, width):
        text = "the 测试 quick brown 狐狸 jumps"
        for line in pack_segment(text, width, narrow_wide_measure):
            # 超宽的行只能是单个不可再分的单元（单个中文或单个英文单词）
            if narrow_wide_measure(line) > width:
                assert " " not in line
                assert len(line) == 1 or line.isascii()

    def test_measurer_never_sees_empty_text(self, recording_measure):
        pack_segment("  服务 ok", 2, recording_measure)
        assert "" not in recording_measure.calls


class TestErrors:
    @pytest.mark.parametrize("width", [0, -1])
    def test_non_positive_width_rejected(self, char_count_measure, width):
        with pytest.raises(InvalidGeometryError):
            pack_segment("abc", width, char_count_measure)

    def test_invalid_geometry_is_value_error(self, char_count_measure):
        with pytest.raises(ValueError):
            pack_segment("abc", 0, char_count_measure)

    def test_measurement_failure_propagates(self):
        def broken(text: str) -> float:
            raise KeyError("glyph missing")

        with pytest.raises(MeasurementError) as exc_info:
            pack_segment("abc", 10, broken)
        assert isinstance(exc_info.value.__cause__, KeyError)
