"""Derive the document regions an edit touched, widened to whole text blocks."""

from collections.abc import Sequence

from loguru import logger

from term_highlight.config import GROUP_ANCESTOR_DEPTH
from term_highlight.core.search.collector import find_group_container
from term_highlight.models.node import Ancestor
from term_highlight.models.search import GroupPredicate, Region
from term_highlight.protocols import DocumentProtocol, EditProtocol, PositionMapProtocol


def _carry(maps: Sequence[PositionMapProtocol], pos: int, assoc: int) -> int:
    for step_map in maps:
        pos = step_map.map(pos, assoc)
    return pos


def _leaf_bounds(parent: Ancestor, pos: int) -> tuple[int, int] | None:
    """Span of the text leaves of ``parent`` that touch ``pos``."""
    bounds: tuple[int, int] | None = None
    offset = parent.content_start
    for child in parent.node.children:
        end = offset + child.node_size
        if offset > pos:
            break
        if child.is_text and pos <= end:
            bounds = (offset, end) if bounds is None else (bounds[0], end)
        offset = end
    return bounds


def _expand(
    doc: DocumentProtocol,
    pos: int,
    side: int,
    is_group: GroupPredicate | None,
    max_depth: int,
) -> int:
    """Move ``pos`` outward (``side`` -1: left, 1: right) to the enclosing block boundary."""
    chain = doc.resolve_ancestors(pos)
    innermost = chain[-1]
    boundary = pos
    if len(chain) > 1 and innermost.node.is_text_block:
        boundary = innermost.pos if side < 0 else innermost.end
    else:
        leaves = _leaf_bounds(innermost, pos)
        if leaves is not None:
            boundary = leaves[0] if side < 0 else leaves[1]

    if is_group is not None:
        group = find_group_container(chain, is_group, max_depth)
        if group is not None:
            boundary = min(boundary, group.pos) if side < 0 else max(boundary, group.end)
    return boundary


def merge_regions(spans: list[tuple[int, int]]) -> list[Region]:
    """Sort spans and coalesce those that overlap or touch."""
    merged: list[list[int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    return [Region(start, end) for start, end in merged]


def detect_changed_ranges(
    edit: EditProtocol,
    *,
    is_group: GroupPredicate | None = None,
    max_depth: int = GROUP_ANCESTOR_DEPTH,
) -> list[Region]:
    """Return the regions of ``edit.doc`` that must be rescanned after ``edit``.

    Every changed span reported by the edit's step maps is carried into
    post-edit coordinates, widened to the text blocks holding its endpoints
    (or to the touching text leaves outside any text block), widened again to
    an enclosing grouping container when ``is_group`` is given, clamped to the
    document and merged.
    """
    doc = edit.doc
    size = doc.content_size
    maps = list(edit.maps)
    spans: list[tuple[int, int]] = []

    for index, step_map in enumerate(maps):
        changed: list[tuple[int, int]] = []
        step_map.for_each(lambda _old_start, _old_end, start, end: changed.append((start, end)))
        later = maps[index + 1 :]
        for new_start, new_end in changed:
            start = min(max(0, _carry(later, new_start, -1)), size)
            end = min(max(start, _carry(later, new_end, 1)), size)
            start = _expand(doc, start, -1, is_group, max_depth)
            end = _expand(doc, end, 1, is_group, max_depth)
            spans.append((max(0, start), min(size, end)))

    regions = merge_regions(spans)
    logger.debug("Edit with {} steps touched regions {}", len(maps), regions)
    return regions
