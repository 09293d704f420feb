"""Engine-facing API used by a view layer."""

import dataclasses
from typing import Any

from loguru import logger

from term_highlight.core.decorations.annotation_set import AnnotationSet
from term_highlight.core.state import (
    PluginState,
    changed_regions,
    configure,
    init_state,
    remap,
    rescan,
)
from term_highlight.models.search import Region, SearchConfig
from term_highlight.protocols import DocumentProtocol, EditProtocol


class HighlightSession:
    """Own the current document and search state of one editing session.

    Every request runs to completion and replaces ``state`` with a new
    value; previously returned states and annotation sets are never touched.
    """

    def __init__(self, doc: DocumentProtocol, config: SearchConfig | None = None) -> None:
        self._doc = doc
        state = init_state(config)
        self._state = configure(state, doc, state.config) if state.config.has_term else state
        # Regions rescanned by the most recent edit.
        self.last_regions: list[Region] = []

    @property
    def doc(self) -> DocumentProtocol:
        return self._doc

    @property
    def state(self) -> PluginState:
        return self._state

    def current_annotations(self) -> AnnotationSet:
        return self._state.annotations

    def request_search(self, term: str | None, **options: Any) -> AnnotationSet:
        """Search for ``term``; ``options`` override fields of the current config.

        A blank term clears every highlight.
        """
        config = dataclasses.replace(self._state.config, search_term=term, **options)
        self._state = configure(self._state, self._doc, config)
        return self._state.annotations

    def request_edit(self, edit: EditProtocol) -> AnnotationSet:
        """Adopt ``edit.doc`` and bring highlights up to date incrementally.

        A failure while rescanning is logged and leaves the remapped
        highlights in place; the edit itself is always accepted.
        """
        self._doc = edit.doc
        remapped = remap(self._state, edit)
        try:
            regions = changed_regions(self._state, edit)
            self._state = rescan(remapped, edit.doc, regions)
            self.last_regions = regions
        except Exception:
            logger.exception("Highlight rescan failed; keeping remapped highlights")
            self._state = remapped
            self.last_regions = []
        return self._state.annotations

    def toggle_whole_word(self, enabled: bool) -> AnnotationSet:
        return self.request_search(self._state.config.search_term, match_whole_words_only=enabled)

    def toggle_case_sensitive(self, enabled: bool) -> AnnotationSet:
        return self.request_search(self._state.config.search_term, case_sensitive=enabled)

    def refresh(self) -> AnnotationSet:
        """Recompute every highlight with the current term and options."""
        self._state = configure(self._state, self._doc, self._state.config)
        return self._state.annotations

    def replace_document(self, doc: DocumentProtocol) -> AnnotationSet:
        """Swap in an externally replaced document and refresh."""
        self._doc = doc
        self.last_regions = []
        return self.refresh()
