"""
Word (.docx) rendering of the abstract document model via python-docx.
"""

import logging
import os
from typing import Optional

from docx import Document
from docx.document import Document as DocxDocument
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor
from docx.table import _Cell

from core.errors import IOFailure
from core.generator_config import StyleConfig
from document.model import DocumentModel, Heading, Paragraph, Table, TableCell

logger = logging.getLogger(__name__)

TABLE_STYLE = "Table Grid"


def _set_style_font(style, font_name: str, size: int, bold: Optional[bool] = None) -> None:
    style.font.name = font_name
    style.font.size = Pt(size)
    if bold is not None:
        style.font.bold = bold
    # East Asian text falls back to a theme font unless rFonts names it
    r_pr = style.element.get_or_add_rPr()
    r_pr.get_or_add_rFonts().set(qn("w:eastAsia"), font_name)


def _shade_cell(cell: _Cell, fill: str) -> None:
    shading = OxmlElement("w:shd")
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:color"), "auto")
    shading.set(qn("w:fill"), fill)
    cell._tc.get_or_add_tcPr().append(shading)


class DocxBackend:
    """Renders a ``DocumentModel`` into a .docx file."""

    def __init__(self, style: Optional[StyleConfig] = None):
        self.style = style or StyleConfig()

    def _apply_styles(self, doc: DocxDocument) -> None:
        style = self.style
        _set_style_font(doc.styles["Normal"], style.font_name, style.body_size)
        for level, size in enumerate(style.heading_sizes, start=1):
            heading = doc.styles[f"Heading {level}"]
            _set_style_font(heading, style.font_name, size, bold=True)
            heading.font.color.rgb = RGBColor(0, 0, 0)
            heading.paragraph_format.keep_with_next = True

    def _fill_cell(self, cell: _Cell, spec: TableCell) -> None:
        paragraph = cell.paragraphs[0]
        for index, line in enumerate(spec.lines):
            if index > 0:
                paragraph.add_run().add_break()
            for text_run in line:
                run = paragraph.add_run(text_run.text)
                run.bold = text_run.bold or spec.bold
                run.underline = text_run.underline
                run.font.name = self.style.font_name
                run.font.size = Pt(self.style.table_size)
        if spec.fill:
            _shade_cell(cell, spec.fill)

    def _add_table(self, doc: DocxDocument, table_spec: Table) -> None:
        table = doc.add_table(rows=0, cols=table_spec.columns)
        table.style = doc.styles[TABLE_STYLE]
        table.autofit = True
        for row_spec in table_spec.rows:
            cells = table.add_row().cells
            column = 0
            for cell_spec in row_spec.cells:
                cell = cells[column]
                if cell_spec.span > 1:
                    cell = cell.merge(cells[column + cell_spec.span - 1])
                self._fill_cell(cell, cell_spec)
                column += cell_spec.span

    def render(self, model: DocumentModel) -> DocxDocument:
        """Build the python-docx document in memory."""
        doc = Document()
        self._apply_styles(doc)

        for block in model.blocks:
            if isinstance(block, Heading):
                doc.add_heading(block.text, level=block.level)
            elif isinstance(block, Paragraph):
                doc.add_paragraph(block.text)
            elif isinstance(block, Table):
                self._add_table(doc, block)

        headings = model.headings()
        if headings:
            doc.core_properties.title = headings[0].text
        return doc

    def write(self, model: DocumentModel, output_path: str) -> str:
        """Render and save the document.

        Returns:
            Absolute path of the written file.

        Raises:
            IOFailure: If the destination cannot be written (locked file,
                invalid path, missing permissions).
        """
        doc = self.render(model)
        output_path = os.path.abspath(output_path)
        try:
            os.makedirs(os.path.dirname(output_path), exist_ok=True)
            doc.save(output_path)
        except OSError as e:
            logger.error("Cannot write document to %s: %s", output_path, e)
            raise IOFailure(f"Cannot write document to {output_path}: {e}", path=output_path) from e

        logger.info("Wrote document to %s", output_path)
        return output_path
