"""Incremental find-in-document highlighting for tree-structured rich text."""

from loguru import logger

from term_highlight.core.decorations.annotation_set import AnnotationSet
from term_highlight.core.search.matcher import compute_full, compute_range
from term_highlight.core.state import PluginState, SearchPhase, apply_edit, configure, init_state
from term_highlight.core.transform.edit import Edit
from term_highlight.models.node import Node
from term_highlight.models.search import Annotation, Region, SearchConfig
from term_highlight.session import HighlightSession

logger.disable("term_highlight")

__all__ = [
    "Annotation",
    "AnnotationSet",
    "Edit",
    "HighlightSession",
    "Node",
    "PluginState",
    "Region",
    "SearchConfig",
    "SearchPhase",
    "apply_edit",
    "compute_full",
    "compute_range",
    "configure",
    "init_state",
]
