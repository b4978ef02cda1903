"""
Integration tests for extractor.py

Tests the high-level orchestration functions against the fixture tree.
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path

from core.errors import ParseFailure
from extraction.extractor import (
    ExtractionStats,
    build_model,
    extract_file,
    extract_to_dict_list,
    relative_source_path,
)

FIXTURES = Path(__file__).parent / "fixtures"
SHOP = FIXTURES / "Shop"
ORDER_FILE = str(SHOP / "Models" / "Order.cs")
GREETER_FILE = str(SHOP / "Services" / "Greeter.cs")
PROGRAM_FILE = str(SHOP / "Program.cs")
BROKEN_FILE = str(FIXTURES / "broken" / "Broken.cs")


class TestExtractionStats(unittest.TestCase):
    """Test ExtractionStats class."""

    def test_creation(self):
        stats = ExtractionStats()
        self.assertEqual(stats.files_processed, 0)
        self.assertEqual(stats.files_failed, 0)
        self.assertEqual(stats.types_extracted, 0)
        self.assertEqual(stats.parse_errors, 0)

    def test_to_dict(self):
        stats = ExtractionStats()
        stats.files_processed = 5
        stats.types_extracted = 20

        result = stats.to_dict()
        self.assertEqual(result["files_processed"], 5)
        self.assertEqual(result["types_extracted"], 20)

    def test_str_representation(self):
        stats = ExtractionStats()
        stats.files_processed = 3
        self.assertIn("processed=3", str(stats))


class TestRelativeSourcePath(unittest.TestCase):
    def test_relative_to_root(self):
        self.assertEqual(relative_source_path(ORDER_FILE, str(SHOP)), "Models/Order.cs")

    def test_without_root(self):
        self.assertEqual(relative_source_path(ORDER_FILE, None), "Order.cs")


class TestExtractFile(unittest.TestCase):
    """Test single-file extraction."""

    def test_order_fixture(self):
        entities = extract_file(ORDER_FILE, str(SHOP))
        self.assertEqual(
            [(e.namespace, e.name, e.kind) for e in entities],
            [
                ("Shop.Domain.Orders", "Order", "Class"),
                ("Shop.Domain.Orders", "Order.Line", "Class"),
                ("Shop.Domain.Orders", "IOrderRepository", "Interface"),
            ],
        )
        self.assertTrue(all(e.file_path == "Models/Order.cs" for e in entities))

    def test_order_members(self):
        order = extract_file(ORDER_FILE, str(SHOP))[0]
        self.assertEqual(order.summary, "Represents a customer order.")
        self.assertEqual(
            [(a.name, a.type, a.visibility) for a in order.attributes],
            [
                ("_lines", "List<Line>", "private"),
                ("Id", "int", "public"),
                ("discount", "decimal", "protected"),
                ("surcharge", "decimal", "protected"),
            ],
        )
        self.assertEqual(order.attributes[1].summary, "Unique order number.")
        self.assertEqual(
            [(m.name, m.return_type, m.visibility) for m in order.methods],
            [("AddLine", "void", "public"), ("Total", "decimal", "internal")],
        )
        add_line = order.methods[0]
        self.assertEqual(add_line.summary, "Adds a line to the order.")
        self.assertEqual(
            [(p.name, p.type, p.summary) for p in add_line.parameters],
            [("sku", "string", "Stock keeping unit."), ("quantity", "int", "Number of items.")],
        )

    def test_interface_summary_with_cref(self):
        repo = extract_file(ORDER_FILE, str(SHOP))[2]
        self.assertEqual(repo.summary, "Persists orders; see Shop.Domain.Orders.Order.")
        self.assertEqual(repo.methods[0].parameters[0].summary, "Order id.")

    def test_file_scoped_namespace(self):
        greeter = extract_file(GREETER_FILE, str(SHOP))[0]
        self.assertEqual(greeter.namespace, "Shop.Services")
        self.assertEqual([a.visibility for a in greeter.attributes], ["private"])

    def test_global_namespace(self):
        program = extract_file(PROGRAM_FILE, str(SHOP))[0]
        self.assertEqual(program.namespace, "Global")
        self.assertEqual(program.methods[0].parameters[0].type, "string[]")

    def test_nonexistent_file(self):
        with self.assertRaises(ParseFailure):
            extract_file(str(SHOP / "Missing.cs"))

    def test_non_csharp_file(self):
        with self.assertRaises(ParseFailure):
            extract_file(str(SHOP / "generate.ignore"))

    def test_broken_file_lenient(self):
        """Syntax errors only warn unless strict mode is requested."""
        extract_file(BROKEN_FILE)

    def test_broken_file_strict(self):
        with self.assertRaises(ParseFailure) as ctx:
            extract_file(BROKEN_FILE, strict_syntax=True)
        self.assertEqual(ctx.exception.path, os.path.abspath(BROKEN_FILE))


class TestBuildModel(unittest.TestCase):
    """Test multi-file model building."""

    def test_file_order_is_preserved(self):
        entities, stats = build_model([PROGRAM_FILE, ORDER_FILE], root=str(SHOP))
        self.assertEqual(
            [e.name for e in entities],
            ["Program", "Order", "Order.Line", "IOrderRepository"],
        )
        self.assertEqual(stats.files_processed, 2)
        self.assertEqual(stats.types_extracted, 4)

    def test_deterministic(self):
        first, _ = build_model([ORDER_FILE, GREETER_FILE], root=str(SHOP))
        second, _ = build_model([ORDER_FILE, GREETER_FILE], root=str(SHOP))
        self.assertEqual(first, second)

    def test_failure_aborts_by_default(self):
        temp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, temp_dir)
        bad = os.path.join(temp_dir, "Bad.cs")
        with open(bad, "wb") as f:
            f.write(b"class Caf\xe9 { }")

        with self.assertRaises(ParseFailure):
            build_model([ORDER_FILE, bad])

    def test_continue_on_error(self):
        entities, stats = build_model(
            [str(SHOP / "Missing.cs"), GREETER_FILE],
            root=str(SHOP),
            continue_on_error=True,
        )
        self.assertEqual([e.name for e in entities], ["Greeter"])
        self.assertEqual(stats.files_failed, 1)
        self.assertEqual(stats.files_processed, 1)

    def test_parse_errors_counted(self):
        _, stats = build_model([BROKEN_FILE])
        self.assertGreater(stats.parse_errors, 0)

    def test_empty_file_list(self):
        entities, stats = build_model([])
        self.assertEqual(entities, [])
        self.assertEqual(stats.files_processed, 0)


class TestExtractToDictList(unittest.TestCase):
    def test_serializable_dicts(self):
        result = extract_to_dict_list([GREETER_FILE], root=str(SHOP))
        self.assertEqual(result[0]["name"], "Greeter")
        self.assertEqual(result[0]["methods"][0]["parameters"][0]["name"], "name")
        self.assertEqual(result[0]["file_path"], "Services/Greeter.cs")


if __name__ == "__main__":
    unittest.main()
