"""Search state: immutable plugin state and its two transitions."""

import enum
from dataclasses import dataclass, field

from loguru import logger

from term_highlight.core.decorations.annotation_set import AnnotationSet
from term_highlight.core.search.matcher import compute_full, compute_range
from term_highlight.core.tree.changes import detect_changed_ranges
from term_highlight.models.search import Region, SearchConfig
from term_highlight.protocols import DocumentProtocol, EditProtocol


class SearchPhase(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class PluginState:
    """Search configuration plus the annotations it currently produces."""

    config: SearchConfig = field(default_factory=SearchConfig)
    annotations: AnnotationSet = field(default_factory=AnnotationSet.empty)

    @property
    def phase(self) -> SearchPhase:
        return SearchPhase.ACTIVE if self.config.has_term else SearchPhase.IDLE


def init_state(config: SearchConfig | None = None) -> PluginState:
    return PluginState(config=config or SearchConfig())


def configure(state: PluginState, doc: DocumentProtocol, config: SearchConfig) -> PluginState:
    """Switch to ``config`` and recompute every annotation of ``doc``."""
    annotations = compute_full(doc, config)
    logger.debug(
        "Configured search {!r}: {} -> {} annotations",
        config.search_term,
        len(state.annotations),
        len(annotations),
    )
    return PluginState(config=config, annotations=annotations)


def changed_regions(state: PluginState, edit: EditProtocol) -> list[Region]:
    """Regions :func:`apply_edit` rescans for ``edit`` (empty when it only remaps)."""
    config = state.config
    if not config.live_updates or not edit.doc_changed or not config.has_term:
        return []
    return detect_changed_ranges(edit, is_group=config.is_group, max_depth=config.group_depth)


def remap(state: PluginState, edit: EditProtocol) -> PluginState:
    """Re-address annotations through ``edit`` without rescanning anything."""
    annotations = state.annotations.map_through(edit.mapping, edit.doc)
    return PluginState(config=state.config, annotations=annotations)


def rescan(state: PluginState, doc: DocumentProtocol, regions: list[Region]) -> PluginState:
    """Replace the annotations overlapping each region with freshly computed ones."""
    annotations = state.annotations
    for region in regions:
        stale = annotations.find(region.start, region.end)
        fresh = compute_range(doc, state.config, region)
        annotations = annotations.remove(stale).add(doc, fresh)
    return PluginState(config=state.config, annotations=annotations)


def apply_edit(state: PluginState, edit: EditProtocol) -> PluginState:
    """Carry annotations across ``edit``, rescanning only the regions it touched."""
    return rescan(remap(state, edit), edit.doc, changed_regions(state, edit))
