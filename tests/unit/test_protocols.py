"""Tests that the concrete collaborators satisfy the engine's protocols."""

from term_highlight.core.transform.edit import Edit
from term_highlight.core.transform.mapping import Mapping, StepMap
from term_highlight.protocols import DocumentProtocol, EditProtocol, PositionMapProtocol
from tests.unit.fakes import FakeEdit, doc, p, t


def test_node_is_a_document() -> None:
    assert isinstance(doc(p(t("a"))), DocumentProtocol)


def test_maps_are_position_maps() -> None:
    assert isinstance(StepMap.replace(0, 0, 1), PositionMapProtocol)
    assert isinstance(Mapping(), PositionMapProtocol)


def test_edits_satisfy_edit_protocol() -> None:
    root = doc(p(t("a")))
    assert isinstance(Edit.begin(root), EditProtocol)
    assert isinstance(FakeEdit(root), EditProtocol)


def test_edited_document_is_still_a_document() -> None:
    change = Edit.begin(doc(p(t("ab")))).insert_text(1, "x")
    assert isinstance(change.doc, DocumentProtocol)
