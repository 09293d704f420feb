"""Tests for computing match annotations."""

import pytest

from term_highlight.core.search.matcher import compute_full, compute_range
from term_highlight.models.node import Node
from term_highlight.models.search import Annotation, Region, SearchConfig
from tests.unit.fakes import doc, li, p, t, ul


def _spans(root: Node, term: str, **options: object) -> list[tuple[int, int]]:
    config = SearchConfig(search_term=term, **options)  # type: ignore[arg-type]
    return [(a.start, a.end) for a in compute_full(root, config)]


def test_finds_every_occurrence(cat_doc: Node) -> None:
    result = compute_full(cat_doc, SearchConfig(search_term="cat", highlight_class="hl"))
    assert list(result) == [Annotation(5, 8, "hl"), Annotation(20, 23, "hl")]


def test_full_compute_is_idempotent(cat_doc: Node) -> None:
    config = SearchConfig(search_term="cat")
    assert compute_full(cat_doc, config) == compute_full(cat_doc, config)


def test_matches_in_selected_container_get_individual_class(selected_doc: Node) -> None:
    config = SearchConfig(
        search_term="cat",
        highlight_class="hl",
        individual_highlight_class="current",
        selected_container_id="P1",
    )
    assert list(compute_full(selected_doc, config)) == [
        Annotation(5, 8, "current"),
        Annotation(21, 24, "hl"),
    ]


def test_selected_falls_back_to_highlight_class(selected_doc: Node) -> None:
    config = SearchConfig(search_term="cat", highlight_class="hl", selected_container_id="P1")
    assert {a.style_class for a in compute_full(selected_doc, config)} == {"hl"}


def test_unset_highlight_class_becomes_empty_string(cat_doc: Node) -> None:
    config = SearchConfig(search_term="cat", highlight_class=None)
    assert {a.style_class for a in compute_full(cat_doc, config)} == {""}


@pytest.mark.parametrize("term", [None, "", "   "])
def test_blank_term_clears_everything(cat_doc: Node, term: str | None) -> None:
    assert len(compute_full(cat_doc, SearchConfig(search_term=term))) == 0
    assert compute_range(cat_doc, SearchConfig(search_term=term), Region(0, 5)) == []


def test_no_match_across_paragraph_boundary() -> None:
    assert _spans(doc(p(t("foo ca")), p(t("t bar"))), "cat") == []


def test_term_split_by_formatting_inside_list_item_is_found() -> None:
    # ul@0 > li@1 > p@2 > "Hel"@3 "lo"@6
    root = doc(ul(li(p(t("Hel"), t("lo", "bold")))))
    assert _spans(root, "hello") == [(3, 8)]


def test_term_split_across_two_list_items_is_not_found() -> None:
    root = doc(ul(li(p(t("Hel"))), li(p(t("lo")))))
    assert _spans(root, "hello") == []


def test_ordinary_text_is_matched_leaf_by_leaf() -> None:
    assert _spans(doc(p(t("Hel"), t("lo", "bold"))), "hello") == []


def test_several_matches_in_one_group_map_to_their_leaves() -> None:
    # p content starts at 3: "cat "@3 "cat"@7 " ca"@10 "t"@13
    root = doc(ul(li(p(t("cat "), t("cat", "em"), t(" ca"), t("t", "em")))))
    assert _spans(root, "cat") == [(3, 6), (7, 10), (11, 14)]


def test_search_term_is_literal() -> None:
    root = doc(p(t("a.b*c and axbbc")))
    assert _spans(root, "a.b*c") == [(1, 6)]


def test_whole_word_toggle() -> None:
    root = doc(p(t("the cat sat")), p(t("category")))
    assert _spans(root, "cat", match_whole_words_only=True) == [(5, 8)]
    assert _spans(root, "cat") == [(5, 8), (14, 17)]


def test_case_sensitivity() -> None:
    root = doc(p(t("Cat cat")))
    assert _spans(root, "cat") == [(1, 4), (5, 8)]
    assert _spans(root, "cat", case_sensitive=True) == [(5, 8)]


def test_matches_containing_line_breaks_are_rejected() -> None:
    root = doc(p(t("foo\nbar")))
    assert _spans(root, "o\nb") == []
    assert _spans(root, "foo") == [(1, 4)]


def test_compute_range_keeps_only_matches_inside_region(cat_doc: Node) -> None:
    config = SearchConfig(search_term="cat")
    assert compute_range(cat_doc, config, Region(0, 10)) == [Annotation(5, 8, "highlight")]
    assert compute_range(cat_doc, config, Region(6, 28)) == [Annotation(20, 23, "highlight")]


def test_region_beyond_document_is_rejected(cat_doc: Node) -> None:
    with pytest.raises(ValueError, match="outside of document"):
        compute_range(cat_doc, SearchConfig(search_term="cat"), Region(0, 1000))


def test_inverted_region_is_rejected() -> None:
    with pytest.raises(ValueError, match="Invalid region"):
        Region(8, 3)


def test_custom_group_types_concatenate_paragraph_text() -> None:
    root = doc(p(t("Hel"), t("lo", "bold")))
    assert _spans(root, "hello", group_types=frozenset({"paragraph"})) == [(1, 6)]


def test_no_match_across_paragraphs_of_one_list_item() -> None:
    root = doc(ul(li(p(t("foo ca")), p(t("t bar")))))
    assert _spans(root, "cat") == []
    # "t bar" starts at 11 (the second paragraph opens at 10)
    assert _spans(root, "bar") == [(13, 16)]


def test_no_match_across_inline_break_in_list_item() -> None:
    root = doc(ul(li(p(t("foo ca"), Node.element("hard_break"), t("t bar")))))
    assert _spans(root, "cat") == []
    assert _spans(root, "bar") == [(13, 16)]


def test_runs_after_a_block_boundary_keep_their_positions(mixed_doc: Node) -> None:
    assert _spans(mixed_doc, "gbi") == []
    assert _spans(mixed_doc, "bird") == [(34, 38)]
    assert _spans(mixed_doc, "cat food") == [(16, 24)]
