"""
Layer 2: Document Assembly

Namespace grouping, section numbering and rendering of the type model into
a tabular Word document.
"""

from document.numbering import NumberedSection, display_namespace, number_sections
from document.model import DocumentModel, Heading, Paragraph, Table, TableCell, TableRow, TextRun
from document.assembler import assemble_document, build_type_table
from document.docx_backend import DocxBackend

__all__ = [
    "NumberedSection",
    "display_namespace",
    "number_sections",
    "DocumentModel",
    "Heading",
    "Paragraph",
    "Table",
    "TableCell",
    "TableRow",
    "TextRun",
    "assemble_document",
    "build_type_table",
    "DocxBackend",
]
