"""CLI for term-highlight (find matches, replay an edit incrementally)."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from term_highlight.core.importer.json_reader import load_document, node_to_json
from term_highlight.core.transform.edit import Edit
from term_highlight.logging_config import configure_logging
from term_highlight.models.node import Node
from term_highlight.models.search import Annotation, Region, SearchConfig
from term_highlight.session import HighlightSession

app = typer.Typer(help="Find and highlight search terms in rich-text JSON documents.")

WholeWordOpt = Annotated[
    bool, typer.Option("--whole-word", "-w", help="Match whole words only")
]
CaseSensitiveOpt = Annotated[
    bool, typer.Option("--case-sensitive", "-c", help="Match case exactly")
]
SelectedOpt = Annotated[
    str | None,
    typer.Option("--selected", "-s", help="Identity of the selected container"),
]
ClassOpt = Annotated[str, typer.Option("--class", help="Style class for matches")]
IndividualClassOpt = Annotated[
    str | None,
    typer.Option("--individual-class", help="Style class for matches in the selected container"),
]
JsonOpt = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _load(path: Path) -> Node:
    if not path.exists():
        logger.error("Document not found: {}", path)
        raise typer.Exit(1)
    try:
        return load_document(path)
    except (ValueError, KeyError) as e:
        logger.error("Cannot parse {}: {}", path, e)
        raise typer.Exit(1) from e


def _echo_matches(
    doc: Node,
    annotations: list[Annotation],
    *,
    as_json: bool,
    regions: list[Region] | None = None,
) -> None:
    """Print annotations with the text they cover (and rescanned regions, if given)."""
    text_at = _text_slicer(doc)
    if as_json:
        data: dict[str, Any] = {
            "matches": [
                {
                    "from": a.start,
                    "to": a.end,
                    "class": a.style_class,
                    "text": text_at(a.start, a.end),
                }
                for a in annotations
            ],
            "count": len(annotations),
        }
        if regions is not None:
            data["regions"] = [[r.start, r.end] for r in regions]
        typer.echo(json.dumps(data, indent=2))
        return

    if regions is not None:
        spans = ", ".join(f"[{r.start}, {r.end})" for r in regions) or "none"
        typer.echo(f"Rescanned regions: {spans}")
    typer.echo(f"Found {len(annotations)} matches:\n")
    for a in annotations:
        typer.echo(f"  [{a.start}, {a.end})  {a.style_class or '-'}  {text_at(a.start, a.end)!r}")


def _text_slicer(doc: Node) -> Callable[[int, int], str]:
    """Return a function giving the text between two positions of ``doc``."""
    chars: dict[int, str] = {}

    def visit(node: Node, pos: int) -> bool:
        if node.is_text:
            for i, ch in enumerate(node.text or ""):
                chars[pos + i] = ch
            return False
        return True

    doc.descendants(visit)
    return lambda start, end: "".join(chars.get(p, "") for p in range(start, end))


@app.command()
def find(
    document: Path = typer.Argument(..., help="JSON document to search"),
    term: str = typer.Argument(..., help="Search term"),
    whole_word: WholeWordOpt = False,
    case_sensitive: CaseSensitiveOpt = False,
    selected: SelectedOpt = None,
    highlight_class: ClassOpt = "highlight",
    individual_class: IndividualClassOpt = None,
    output_json: JsonOpt = False,
) -> None:
    """List every match of a term in a document."""
    doc = _load(document)
    config = SearchConfig(
        search_term=term,
        match_whole_words_only=whole_word,
        case_sensitive=case_sensitive,
        highlight_class=highlight_class,
        individual_highlight_class=individual_class,
        selected_container_id=selected,
    )
    session = HighlightSession(doc, config)
    _echo_matches(doc, list(session.current_annotations()), as_json=output_json)


@app.command()
def edit(
    document: Path = typer.Argument(..., help="JSON document to edit"),
    term: str = typer.Argument(..., help="Search term"),
    at: int = typer.Option(..., "--at", "-a", help="Position where the edit starts"),
    delete: int = typer.Option(0, "--delete", "-d", help="Number of positions to delete"),
    insert: str = typer.Option("", "--insert", "-i", help="Text to insert"),
    whole_word: WholeWordOpt = False,
    case_sensitive: CaseSensitiveOpt = False,
    selected: SelectedOpt = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the edited document here"),
    ] = None,
    output_json: JsonOpt = False,
) -> None:
    """Apply one text edit and show which regions were rescanned."""
    doc = _load(document)
    session = HighlightSession(
        doc,
        SearchConfig(
            search_term=term,
            match_whole_words_only=whole_word,
            case_sensitive=case_sensitive,
            selected_container_id=selected,
        ),
    )
    try:
        change = Edit.begin(doc).replace_text(at, at + delete, insert)
    except ValueError as e:
        logger.error("Cannot apply edit: {}", e)
        raise typer.Exit(1) from e

    annotations = list(session.request_edit(change))
    if output is not None:
        output.write_text(json.dumps(node_to_json(change.doc), indent=2), encoding="utf-8")
        logger.info("Wrote edited document to {}", output)

    _echo_matches(change.doc, annotations, as_json=output_json, regions=session.last_regions)
