"""Find search matches in a document and turn them into annotations."""

import bisect
import re
from collections.abc import Iterator

from loguru import logger

from term_highlight.config import LINE_BREAK_CHARS
from term_highlight.core.decorations.annotation_set import AnnotationSet
from term_highlight.core.search.collector import collect_text_runs, group_runs
from term_highlight.core.search.pattern import build_pattern
from term_highlight.core.search.selected import locate_selected
from term_highlight.models.search import Annotation, Region, SearchConfig, SelectedSpans, TextRun
from term_highlight.protocols import DocumentProtocol

# Joins runs that are not adjacent; must be one of LINE_BREAK_CHARS.
_RUN_GAP = "\n"


def _scan_runs(runs: list[TextRun], pattern: re.Pattern[str]) -> Iterator[tuple[int, int, str]]:
    """Yield ``(start, end, matched)`` for matches in the concatenated text of ``runs``.

    Positions are absolute. Runs that are not adjacent in the document (a
    block boundary or an inline node lies between them) are joined with
    ``_RUN_GAP``, so a match spanning them contains a line break. A group of
    several runs is first checked as a whole and skipped when it cannot match.
    """
    if len(runs) == 1:
        run = runs[0]
        for m in pattern.finditer(run.text):
            yield run.start + m.start(), run.start + m.end(), m.group()
        return

    parts: list[str] = []
    offsets: list[int] = []
    length = 0
    for i, run in enumerate(runs):
        if i and runs[i - 1].end != run.start:
            parts.append(_RUN_GAP)
            length += len(_RUN_GAP)
        offsets.append(length)
        parts.append(run.text)
        length += len(run.text)
    text = "".join(parts)
    if not pattern.search(text):
        return

    for m in pattern.finditer(text):
        if m.start() == m.end():
            continue
        first = bisect.bisect_right(offsets, m.start()) - 1
        last = bisect.bisect_right(offsets, m.end() - 1) - 1
        start = runs[first].start + m.start() - offsets[first]
        end = runs[last].start + m.end() - offsets[last]
        yield start, end, m.group()


def _accept(start: int, end: int, matched: str, region: Region) -> bool:
    if start == end:
        return False
    if any(ch in LINE_BREAK_CHARS for ch in matched):
        return False
    return region.contains(start, end)


def _style_for(start: int, end: int, selected: SelectedSpans, config: SearchConfig) -> str:
    if config.individual_highlight_class and selected.contains(start, end):
        return config.individual_highlight_class
    return config.highlight_class or ""


def compute_range(
    doc: DocumentProtocol, config: SearchConfig, region: Region
) -> list[Annotation]:
    """Compute annotations for every match fully inside ``region``.

    Args:
        doc: Document to scan.
        config: Search term and options; a blank term yields no matches.
        region: Span of ``doc`` to rescan.

    Returns:
        Annotations in document order.
    """
    if not config.has_term:
        return []
    if region.end > doc.content_size:
        msg = f"Region {region.start}..{region.end} outside of document (0..{doc.content_size})"
        raise ValueError(msg)

    pattern = build_pattern(
        config.search_term or "",
        whole_word=config.match_whole_words_only,
        case_sensitive=config.case_sensitive,
    )
    selected = locate_selected(doc, region, config.selected_container_id)
    runs = collect_text_runs(doc, region, is_group=config.is_group, max_depth=config.group_depth)

    annotations: list[Annotation] = []
    for group in group_runs(runs):
        for start, end, matched in _scan_runs(group, pattern):
            if not _accept(start, end, matched, region):
                continue
            style = _style_for(start, end, selected, config)
            annotations.append(Annotation(start=start, end=end, style_class=style))

    logger.debug(
        "Found {} matches for {!r} in {}..{} ({} runs)",
        len(annotations),
        config.search_term,
        region.start,
        region.end,
        len(runs),
    )
    return annotations


def compute_full(doc: DocumentProtocol, config: SearchConfig) -> AnnotationSet:
    """Compute the annotation set for the whole document."""
    if not config.has_term:
        return AnnotationSet.empty()
    return AnnotationSet.create(doc, compute_range(doc, config, Region(0, doc.content_size)))
