"""Tests for the python-docx rendering backend."""

import os
import shutil
import tempfile
import unittest

import docx

from core.errors import IOFailure
from core.generator_config import StyleConfig
from document.assembler import assemble_document
from document.docx_backend import DocxBackend
from document.numbering import number_sections
from extraction.models import Attribute, Method, Parameter, TypeEntity

ENTITIES = [
    TypeEntity(
        name="Order",
        namespace="Shop.Domain",
        kind="Class",
        summary="A customer order.",
        attributes=(Attribute(name="Id", type="int", visibility="public"),),
        methods=(
            Method(
                name="AddLine",
                return_type="void",
                visibility="public",
                parameters=(Parameter(name="sku", type="string"),),
            ),
        ),
    ),
    TypeEntity(name="IRepo", namespace="Shop.Data", kind="Interface"),
]


class TestDocxBackend(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.temp_dir)
        self.model = assemble_document(number_sections(ENTITIES, 3), 3)

    def test_write_and_reopen(self):
        path = DocxBackend().write(self.model, os.path.join(self.temp_dir, "out", "Spec.docx"))
        self.assertTrue(os.path.isfile(path))

        document = docx.Document(path)
        headings = [
            (p.style.name, p.text) for p in document.paragraphs if p.style.name.startswith("Heading")
        ]
        self.assertEqual(
            headings,
            [
                ("Heading 1", "3. Class Specifications"),
                ("Heading 2", "3.1 Domain"),
                ("Heading 3", "3.1.1 Order"),
                ("Heading 2", "3.2 Data"),
                ("Heading 3", "3.2.1 IRepo"),
            ],
        )
        self.assertEqual(len(document.tables), 2)
        self.assertEqual(document.core_properties.title, "3. Class Specifications")

    def test_table_content(self):
        path = DocxBackend().write(self.model, os.path.join(self.temp_dir, "Spec.docx"))
        table = docx.Document(path).tables[0]

        self.assertEqual([c.text for c in table.rows[0].cells], ["No", "Name", "Description"])
        # merged block header repeats across the spanned cells
        self.assertEqual({c.text for c in table.rows[1].cells}, {"Attributes"})
        self.assertEqual(table.rows[2].cells[0].text, "01")
        self.assertIn("Type: int", table.rows[2].cells[2].text)
        self.assertIn("- sku: string", table.rows[4].cells[2].text)

    def test_styles_applied(self):
        style = StyleConfig(font_name="Arial", body_size=10)
        document = DocxBackend(style).render(self.model)
        normal = document.styles["Normal"]
        self.assertEqual(normal.font.name, "Arial")
        self.assertEqual(normal.font.size.pt, 10)
        self.assertEqual(document.styles["Heading 1"].font.size.pt, 16)

    def test_header_shading(self):
        document = DocxBackend().render(self.model)
        cell = document.tables[0].rows[0].cells[0]
        self.assertIn('w:fill="FFE8E1"', cell._tc.xml)

    def test_unwritable_destination(self):
        blocker = os.path.join(self.temp_dir, "blocker")
        with open(blocker, "w", encoding="utf-8") as f:
            f.write("not a directory")

        with self.assertRaises(IOFailure) as ctx:
            DocxBackend().write(self.model, os.path.join(blocker, "Spec.docx"))
        self.assertTrue(ctx.exception.path.endswith("Spec.docx"))


if __name__ == "__main__":
    unittest.main()
