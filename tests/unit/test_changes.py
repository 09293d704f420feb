"""Tests for changed-range detection."""

from term_highlight.core.search.collector import is_list_item
from term_highlight.core.transform.edit import Edit
from term_highlight.core.transform.mapping import StepMap
from term_highlight.core.tree.changes import detect_changed_ranges, merge_regions
from term_highlight.models.search import Region
from tests.unit.fakes import FakeEdit, doc, li, p, t, ul


def test_edit_without_steps_touches_nothing() -> None:
    assert detect_changed_ranges(Edit.begin(doc(p(t("abc"))))) == []


def test_insertion_widens_to_enclosing_paragraph() -> None:
    # p@[0, 9) "The cat", p@[9, 16) "A cat"
    change = Edit.begin(doc(p(t("The cat")), p(t("A cat")))).insert_text(5, "xyz")
    assert detect_changed_ranges(change) == [Region(0, 12)]


def test_spans_of_earlier_steps_are_carried_into_final_coordinates() -> None:
    # Three paragraphs of size 5: [0, 5) [5, 10) [10, 15)
    change = Edit.begin(doc(p(t("aaa")), p(t("bbb")), p(t("ccc"))))
    change = change.insert_text(12, "X").insert_text(2, "Y")
    assert change.doc.text_content == "aYaabbbcXcc"
    assert detect_changed_ranges(change) == [Region(0, 6), Region(11, 17)]


def test_steps_in_the_same_paragraph_merge() -> None:
    change = Edit.begin(doc(p(t("abcdef")), p(t("ghi")))).insert_text(2, "X").delete(5, 6)
    assert detect_changed_ranges(change) == [Region(0, 8)]


def test_grouping_container_widens_the_region() -> None:
    # ul@0 > li@1 > p@[2, 7) "one", p@[7, 12) "two"
    change = Edit.begin(doc(ul(li(p(t("one")), p(t("two")))))).insert_text(9, "X")
    assert detect_changed_ranges(change, is_group=is_list_item) == [Region(1, 14)]
    assert detect_changed_ranges(change) == [Region(7, 13)]


def test_text_directly_under_root_widens_to_touching_leaves() -> None:
    change = Edit.begin(doc(t("The cat sat"))).insert_text(5, "X")
    assert detect_changed_ranges(change) == [Region(0, 12)]


def test_block_insertion_keeps_raw_span() -> None:
    after = doc(p(t("aaa")), p(t("bbb")))
    change = FakeEdit(after, [StepMap.replace(5, 5, 5)])
    assert detect_changed_ranges(change) == [Region(5, 10)]
    assert change.map_reads == 1


def test_deletion_collapses_to_the_paragraph() -> None:
    change = Edit.begin(doc(p(t("The cat")), p(t("x")))).delete(1, 5)
    assert change.doc.text_content == "catx"
    assert detect_changed_ranges(change) == [Region(0, 5)]


def test_merge_regions_sorts_and_coalesces() -> None:
    assert merge_regions([(10, 12), (0, 3), (2, 5), (5, 7)]) == [Region(0, 7), Region(10, 12)]
    assert merge_regions([]) == []
