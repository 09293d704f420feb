"""Flatten the text of a document region into searchable runs."""

from term_highlight.config import GROUP_ANCESTOR_DEPTH, LIST_ITEM_TYPES
from term_highlight.models.node import Ancestor, Node
from term_highlight.models.search import GroupKey, GroupPredicate, Region, TextRun
from term_highlight.protocols import DocumentProtocol


def is_list_item(node: Node) -> bool:
    return not node.is_text and node.type in LIST_ITEM_TYPES


def find_group_container(
    chain: list[Ancestor],
    is_group: GroupPredicate,
    max_depth: int = GROUP_ANCESTOR_DEPTH,
) -> Ancestor | None:
    """Return the nearest grouping ancestor at most ``max_depth`` levels up, if any.

    ``chain`` is the ancestor chain of a position (root first). The root
    itself never groups.
    """
    for ancestor in list(reversed(chain[1:]))[:max_depth]:
        if is_group(ancestor.node):
            return ancestor
    return None


def collect_text_runs(
    doc: DocumentProtocol,
    region: Region,
    *,
    is_group: GroupPredicate = is_list_item,
    max_depth: int = GROUP_ANCESTOR_DEPTH,
) -> list[TextRun]:
    """Collect every text leaf overlapping ``region``, in document order.

    Leaves inside the same grouping container share a ``("group", pos)`` key;
    every other leaf gets its own ``("leaf", pos)`` key.
    """
    runs: list[TextRun] = []
    # Ancestor chains are tracked during the walk, so no per-leaf resolve is needed.
    chain: list[Ancestor] = [Ancestor(node=doc, pos=-1, index=0)]

    def visit(node: Node, pos: int) -> bool:
        while len(chain) > 1 and pos >= chain[-1].end:
            chain.pop()
        if not node.is_text:
            chain.append(Ancestor(node=node, pos=pos, index=0))
            return True
        group = find_group_container(chain, is_group, max_depth)
        key: GroupKey = ("group", group.pos) if group else ("leaf", pos)
        runs.append(TextRun(text=node.text or "", start=pos, group_key=key))
        return False

    doc.nodes_between(region.start, region.end, visit)
    return runs


def group_runs(runs: list[TextRun]) -> list[list[TextRun]]:
    """Group runs by key, keeping document order of first appearance."""
    groups: dict[GroupKey, list[TextRun]] = {}
    for run in runs:
        groups.setdefault(run.group_key, []).append(run)
    return list(groups.values())

