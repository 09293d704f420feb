"""Configuration constants for term-highlight."""

# Style class applied to every match unless the search overrides it.
DEFAULT_HIGHLIGHT_CLASS: str = "highlight"

# Rescan changed regions on every edit (False: only remap existing highlights).
DEFAULT_LIVE_UPDATES: bool = True

# Container types whose text is concatenated before matching.
LIST_ITEM_TYPES: frozenset[str] = frozenset({"list_item", "listItem", "li"})

# How many ancestors above a text leaf are inspected for a grouping container.
GROUP_ANCESTOR_DEPTH: int = 3

# Container types that hold inline content even when empty.
TEXT_BLOCK_TYPES: frozenset[str] = frozenset({"paragraph", "heading", "code_block"})

# Attribute carrying a container's identity (compared to the selected id).
IDENTITY_ATTR: str = "objectId"

# A match containing any of these is never highlighted.
LINE_BREAK_CHARS: frozenset[str] = frozenset({"\n", "\r", "\u2028", "\u2029"})
