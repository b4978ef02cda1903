"""Tests for assembling numbered sections into the abstract document."""

import unittest

from core.generator_config import StyleConfig
from document.assembler import (
    assemble_document,
    build_type_table,
    format_parameter,
    row_number,
)
from document.model import Heading, Paragraph, Table
from document.numbering import number_sections
from extraction.models import Attribute, Method, Parameter, TypeEntity

ORDER = TypeEntity(
    name="Order",
    namespace="Shop.Domain",
    kind="Class",
    summary="A customer order.",
    attributes=(
        Attribute(name="Id", type="int", visibility="public", summary="Order number."),
        Attribute(name="_lines", type="List<Line>", visibility="private"),
    ),
    methods=(
        Method(
            name="AddLine",
            return_type="void",
            visibility="public",
            summary="Adds a line.",
            parameters=(
                Parameter(name="sku", type="string", summary="Stock keeping unit."),
                Parameter(name="quantity", type="int"),
            ),
        ),
        Method(name="Total", return_type="decimal", visibility="internal"),
    ),
)
EMPTY = TypeEntity(name="Marker", namespace="Global", kind="Interface")


class TestHelpers(unittest.TestCase):
    def test_row_number(self):
        self.assertEqual(row_number(1), "01")
        self.assertEqual(row_number(12), "12")
        self.assertEqual(row_number(100), "100")

    def test_format_parameter(self):
        self.assertEqual(format_parameter("id", "int"), "- id: int")
        self.assertEqual(format_parameter("id", "int", "Order id."), "- id: int, Order id.")


class TestTypeTable(unittest.TestCase):
    def setUp(self):
        self.table = build_type_table(ORDER, "FFE8E1")
        self.texts = [[cell.text for cell in row.cells] for row in self.table.rows]

    def test_layout(self):
        self.assertEqual(self.table.columns, 3)
        self.assertEqual(self.texts[0], ["No", "Name", "Description"])
        self.assertEqual(self.texts[1], ["Attributes"])
        self.assertEqual(self.texts[4], ["Methods/Operations"])
        self.assertEqual(len(self.table.rows), 7)

    def test_header_cells_styled(self):
        header = self.table.rows[0].cells[0]
        self.assertTrue(header.bold)
        self.assertEqual(header.fill, "FFE8E1")
        block = self.table.rows[1].cells[0]
        self.assertEqual(block.span, 3)

    def test_attribute_rows(self):
        self.assertEqual(
            self.texts[2],
            ["01", "Id", "Visibility: public\nType: int\nDescription: Order number."],
        )
        self.assertEqual(
            self.texts[3],
            ["02", "_lines", "Visibility: private\nType: List<Line>"],
        )

    def test_labels_bold_underlined(self):
        label_run = self.table.rows[2].cells[2].lines[0][0]
        self.assertEqual(label_run.text, "Visibility: ")
        self.assertTrue(label_run.bold)
        self.assertTrue(label_run.underline)

    def test_method_rows(self):
        self.assertEqual(
            self.texts[5],
            [
                "01",
                "AddLine",
                "Visibility: public\nReturn: void\nDescription: Adds a line.\n"
                "Parameters:\n- sku: string, Stock keeping unit.\n- quantity: int",
            ],
        )
        self.assertEqual(
            self.texts[6],
            ["02", "Total", "Visibility: internal\nReturn: decimal\nParameters: None"],
        )

    def test_empty_type_keeps_block_headers(self):
        texts = [[c.text for c in row.cells] for row in build_type_table(EMPTY, "FFFFFF").rows]
        self.assertEqual(
            texts,
            [["No", "Name", "Description"], ["Attributes"], ["Methods/Operations"]],
        )


class TestAssembleDocument(unittest.TestCase):
    def test_block_sequence(self):
        model = assemble_document(number_sections([ORDER, EMPTY], 4), 4)
        kinds = [type(block) for block in model.blocks]
        self.assertEqual(
            kinds,
            [Heading, Heading, Heading, Paragraph, Table, Paragraph,
             Heading, Heading, Table, Paragraph],
        )
        self.assertEqual(
            [(h.level, h.text) for h in model.headings()],
            [
                (1, "4. Class Specifications"),
                (2, "4.1 Domain"),
                (3, "4.1.1 Order"),
                (2, "4.2 Global"),
                (3, "4.2.1 Marker"),
            ],
        )
        self.assertEqual(model.blocks[3], Paragraph("A customer order."))
        self.assertEqual(model.blocks[5], Paragraph(""))

    def test_custom_title_and_fill(self):
        style = StyleConfig(header_fill="D9E2F3")
        model = assemble_document(number_sections([EMPTY], 2), 2, title="Types", style=style)
        self.assertEqual(model.headings()[0].text, "2. Types")
        self.assertEqual(model.tables()[0].rows[0].cells[0].fill, "D9E2F3")

    def test_deterministic(self):
        first = assemble_document(number_sections([ORDER], 1), 1)
        second = assemble_document(number_sections([ORDER], 1), 1)
        self.assertEqual(first, second)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_empty_model_has_title_only(self):
        model = assemble_document([], 1)
        self.assertEqual(model.headings(), (Heading(1, "1. Class Specifications"),))


if __name__ == "__main__":
    unittest.main()
