import pytest

from condann.tree.range_edits import RangeEditor


def test_edits_applied_in_text_order_with_stats():
    text = "abcdef\n123456\nXYZ\n"
    ed = RangeEditor(text)

    start_del = text.index("456")
    ed.add_replacement(start_del, start_del + len("456\n"), "", edit_type="deletion")
    ed.add_replacement(2, 5, "C", edit_type="replace_cde")

    result, stats = ed.apply_edits()

    assert result == "abCf\n123XYZ\n"
    assert stats["edits_applied"] == 2
    # len('cde') - len('C') + len('456\n')
    assert stats["chars_removed"] == 6
    assert stats["lines_removed"] == 1
    assert stats["replace_cde"] == 1
    assert stats["deletion"] == 1


def test_no_edits_returns_original():
    ed = RangeEditor("hello")
    result, stats = ed.apply_edits()
    assert result == "hello"
    assert stats == {"edits_applied": 0, "chars_removed": 0, "lines_removed": 0}


def test_adjacent_edits_are_allowed():
    ed = RangeEditor("abcdef")
    ed.add_replacement(0, 2, "", edit_type=None)
    ed.add_replacement(2, 4, "\n", edit_type=None)
    result, stats = ed.apply_edits()
    assert result == "\nef"
    assert stats["lines_removed"] == -1


def test_overlapping_edits_fail():
    ed = RangeEditor("hello world")
    ed.add_replacement(0, 5, "hi", edit_type=None)
    ed.add_replacement(4, 6, "", edit_type=None)
    with pytest.raises(ValueError, match="overlap"):
        ed.apply_edits()


def test_out_of_bounds_edit_fails():
    ed = RangeEditor("abc")
    ed.add_replacement(1, 10, "", edit_type=None)
    with pytest.raises(ValueError, match="exceeds text length"):
        ed.apply_edits()


def test_inverted_range_is_rejected():
    ed = RangeEditor("abc")
    with pytest.raises(ValueError, match="Invalid range"):
        ed.add_replacement(2, 1, "", edit_type=None)
