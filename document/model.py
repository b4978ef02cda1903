"""
Abstract document model handed to a document backend.

A document is an ordered sequence of blocks: headings, paragraphs and tables.
Table cells hold lines of text runs; styling is limited to bold, underline,
background fill and horizontal span.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class TextRun:
    text: str
    bold: bool = False
    underline: bool = False


@dataclass(frozen=True)
class TableCell:
    """A table cell; each line is a tuple of runs, lines separated by breaks."""

    lines: Tuple[Tuple[TextRun, ...], ...]
    bold: bool = False
    fill: Optional[str] = None
    span: int = 1

    @property
    def text(self) -> str:
        return "\n".join("".join(run.text for run in line) for line in self.lines)


@dataclass(frozen=True)
class TableRow:
    cells: Tuple[TableCell, ...]


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    text: str = ""


@dataclass(frozen=True)
class Table:
    columns: int
    rows: Tuple[TableRow, ...]


Block = Union[Heading, Paragraph, Table]


@dataclass(frozen=True)
class DocumentModel:
    blocks: Tuple[Block, ...]

    def headings(self) -> Tuple[Heading, ...]:
        return tuple(b for b in self.blocks if isinstance(b, Heading))

    def tables(self) -> Tuple[Table, ...]:
        return tuple(b for b in self.blocks if isinstance(b, Table))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blocks": [
                {"kind": type(block).__name__, **asdict(block)} for block in self.blocks
            ]
        }


def plain_cell(text: str, bold: bool = False, fill: Optional[str] = None, span: int = 1) -> TableCell:
    """A cell holding one line of unstyled text."""
    return TableCell(lines=((TextRun(text, bold=bold),),), bold=bold, fill=fill, span=span)
