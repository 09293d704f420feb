"""Parse ProseMirror-style JSON documents into node trees."""

import json
from pathlib import Path
from typing import Any

from term_highlight.models.node import TEXT_TYPE, Node


def parse_node(data: dict[str, Any]) -> Node:
    """Parse one JSON node (and its subtree) into a :class:`Node`.

    Text nodes look like ``{"type": "text", "text": "...", "marks": [{"type": "bold"}]}``;
    containers carry ``content`` (child list) and optional ``attrs``.
    """
    node_type = data.get("type")
    if not isinstance(node_type, str):
        msg = f"Node without a type: {data!r}"
        raise ValueError(msg)

    if node_type == TEXT_TYPE:
        marks = tuple(m["type"] if isinstance(m, dict) else str(m) for m in data.get("marks", []))
        return Node(type=TEXT_TYPE, text=data.get("text", ""), marks=marks)

    # Empty text nodes are dropped, as editors normalise them away.
    children = tuple(
        parse_node(child)
        for child in data.get("content", [])
        if child.get("type") != TEXT_TYPE or child.get("text")
    )
    return Node(type=node_type, children=children, attrs=dict(data.get("attrs") or {}))


def parse_document(data: dict[str, Any]) -> Node:
    doc = parse_node(data)
    if doc.is_text:
        msg = "A document root must be a container, not a text node"
        raise ValueError(msg)
    return doc


def load_document(path: Path) -> Node:
    """Read and parse a JSON document file."""
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        msg = f"Expected a JSON object at the top of {path}, got {type(data).__name__}"
        raise ValueError(msg)
    return parse_document(data)


def node_to_json(node: Node) -> dict[str, Any]:
    """Inverse of :func:`parse_node`."""
    if node.is_text:
        out: dict[str, Any] = {"type": TEXT_TYPE, "text": node.text}
        if node.marks:
            out["marks"] = [{"type": mark} for mark in node.marks]
        return out
    out = {"type": node.type}
    if node.attrs:
        out["attrs"] = dict(node.attrs)
    if node.children:
        out["content"] = [node_to_json(child) for child in node.children]
    return out
