"""
Assembly of the numbered type model into the abstract document.

Every type becomes a level-3 heading followed by one table with an
``Attributes`` block and a ``Methods/Operations`` block. Rows inside each
block are numbered ``01, 02, ...`` independently of the section numbers.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from core.generator_config import DEFAULT_TITLE, StyleConfig, parse_start_index
from document.model import (
    Block,
    DocumentModel,
    Heading,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    TextRun,
    plain_cell,
)
from document.numbering import NumberedSection
from extraction.models import Attribute, Method, TypeEntity

logger = logging.getLogger(__name__)

TABLE_COLUMNS = 3
HEADER_LABELS = ("No", "Name", "Description")
ATTRIBUTES_LABEL = "Attributes"
METHODS_LABEL = "Methods/Operations"
NO_PARAMETERS = "None"

Line = Tuple[TextRun, ...]


def row_number(index: int) -> str:
    """Two-digit, 1-based row label."""
    return f"{index:02d}"


def labelled_line(label: str, value: str) -> Line:
    return (TextRun(f"{label}: ", bold=True, underline=True), TextRun(value))


def format_parameter(name: str, type_name: str, description: str = "") -> str:
    """``- name: type`` with ``, description`` appended when documented."""
    line = f"- {name}: {type_name}"
    if description:
        line += f", {description}"
    return line


def attribute_lines(attribute: Attribute) -> List[Line]:
    lines = [
        labelled_line("Visibility", attribute.visibility),
        labelled_line("Type", attribute.type),
    ]
    if attribute.summary:
        lines.append(labelled_line("Description", attribute.summary))
    return lines


def method_lines(method: Method) -> List[Line]:
    lines = [
        labelled_line("Visibility", method.visibility),
        labelled_line("Return", method.return_type),
    ]
    if method.summary:
        lines.append(labelled_line("Description", method.summary))
    if not method.parameters:
        lines.append(labelled_line("Parameters", NO_PARAMETERS))
        return lines
    lines.append((TextRun("Parameters:", bold=True, underline=True),))
    for param in method.parameters:
        lines.append((TextRun(format_parameter(param.name, param.type, param.summary)),))
    return lines


def _block_header(label: str, fill: str) -> TableRow:
    return TableRow(cells=(plain_cell(label, bold=True, fill=fill, span=TABLE_COLUMNS),))


def _member_row(index: int, name: str, lines: Sequence[Line]) -> TableRow:
    return TableRow(
        cells=(
            plain_cell(row_number(index)),
            plain_cell(name),
            TableCell(lines=tuple(lines)),
        )
    )


def build_type_table(entity: TypeEntity, header_fill: str) -> Table:
    """Build the member table of one type."""
    rows: List[TableRow] = [
        TableRow(
            cells=tuple(plain_cell(label, bold=True, fill=header_fill) for label in HEADER_LABELS)
        ),
        _block_header(ATTRIBUTES_LABEL, header_fill),
    ]
    for index, attribute in enumerate(entity.attributes, start=1):
        rows.append(_member_row(index, attribute.name, attribute_lines(attribute)))

    rows.append(_block_header(METHODS_LABEL, header_fill))
    for index, method in enumerate(entity.methods, start=1):
        rows.append(_member_row(index, method.name, method_lines(method)))

    return Table(columns=TABLE_COLUMNS, rows=tuple(rows))


def assemble_document(
    sections: Iterable[NumberedSection],
    start_index: int,
    title: str = DEFAULT_TITLE,
    style: Optional[StyleConfig] = None,
) -> DocumentModel:
    """Turn numbered sections into the abstract document.

    Args:
        sections: Output of ``number_sections``.
        start_index: Top-level section number, used for the title heading.
        title: Document title text.
        style: Supplies the table header fill colour.

    Returns:
        The document model; identical input yields an equal model.
    """
    start_index = parse_start_index(start_index)
    header_fill = (style or StyleConfig()).header_fill

    blocks: List[Block] = [Heading(level=1, text=f"{start_index}. {title}")]
    type_count = 0
    for section in sections:
        if section.is_namespace:
            blocks.append(Heading(level=2, text=f"{section.label} {section.title}"))
            continue

        entity = section.entity
        blocks.append(Heading(level=3, text=f"{section.label} {section.title}"))
        if entity.summary:
            blocks.append(Paragraph(entity.summary))
        blocks.append(build_type_table(entity, header_fill))
        blocks.append(Paragraph())
        type_count += 1

    logger.info("Assembled document with %d type sections", type_count)
    return DocumentModel(blocks=tuple(blocks))
