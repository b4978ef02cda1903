"""
Unit tests for syntax.py

Tests building the declaration tree from tree-sitter C# syntax trees.
"""

import unittest

from extraction.parser import parse_bytes
from extraction.syntax import (
    FieldDecl,
    MethodDecl,
    PropertyDecl,
    build_declaration_tree,
)


def _declarations(source: bytes):
    return build_declaration_tree(parse_bytes(source))


class TestNamespaces(unittest.TestCase):
    """Test namespace scoping of top-level declarations."""

    def test_global_type(self):
        decls = _declarations(b"class Foo { }")
        self.assertEqual(len(decls), 1)
        self.assertIsNone(decls[0].namespace)
        self.assertEqual(decls[0].declaration.identifier, "Foo")

    def test_block_namespace(self):
        decls = _declarations(b"namespace Shop.Domain { class Foo { } }")
        self.assertEqual(decls[0].namespace, "Shop.Domain")

    def test_nested_namespaces_are_qualified(self):
        source = b"""
namespace Outer
{
    namespace Inner
    {
        class Foo { }
    }
    class Bar { }
}
"""
        decls = _declarations(source)
        self.assertEqual(
            [(d.namespace, d.declaration.identifier) for d in decls],
            [("Outer.Inner", "Foo"), ("Outer", "Bar")],
        )

    def test_file_scoped_namespace(self):
        source = b"""
namespace Shop.Services;

class Foo { }
interface IBar { }
"""
        decls = _declarations(source)
        self.assertEqual([d.namespace for d in decls], ["Shop.Services", "Shop.Services"])
        self.assertEqual([d.declaration.kind for d in decls], ["Class", "Interface"])

    def test_source_order_across_kinds(self):
        source = b"interface IA { } class B { } interface IC { }"
        decls = _declarations(source)
        self.assertEqual([d.declaration.identifier for d in decls], ["IA", "B", "IC"])

    def test_other_type_kinds_skipped(self):
        source = b"""
struct S { }
enum E { A }
record R(int X);
delegate void D();
class C { }
"""
        decls = _declarations(source)
        self.assertEqual([d.declaration.identifier for d in decls], ["C"])

    def test_preprocessor_block_is_transparent(self):
        source = b"""
#if DEBUG
class DebugOnly { }
#endif
"""
        decls = _declarations(source)
        self.assertEqual([d.declaration.identifier for d in decls], ["DebugOnly"])


class TestMembers(unittest.TestCase):
    """Test member declarations of a type."""

    def setUp(self):
        source = b"""
public class Order
{
    private int a, b;

    /// <summary>The id.</summary>
    public int Id { get; set; }

    protected static List<string> Tags(string prefix, int limit = 3) { return null; }

    public Order() { }

    public struct Inner { }

    public interface IPart { void Run(); }
}
"""
        self.decl = _declarations(source)[0].declaration

    def test_type_modifiers(self):
        self.assertEqual(self.decl.modifiers, ("public",))
        self.assertEqual(self.decl.start_line, 2)

    def test_member_kinds_in_order(self):
        self.assertEqual(
            [type(m) for m in self.decl.members],
            [FieldDecl, PropertyDecl, MethodDecl],
        )

    def test_field_with_several_names(self):
        field_decl = self.decl.members[0]
        self.assertEqual(field_decl.names, ("a", "b"))
        self.assertEqual(field_decl.type, "int")
        self.assertEqual(field_decl.modifiers, ("private",))

    def test_property(self):
        prop = self.decl.members[1]
        self.assertEqual((prop.name, prop.type), ("Id", "int"))
        self.assertIn("The id.", prop.doc_comment)

    def test_method_signature(self):
        method = self.decl.members[2]
        self.assertEqual(method.name, "Tags")
        self.assertEqual(method.return_type, "List<string>")
        self.assertEqual(method.modifiers, ("protected", "static"))
        self.assertEqual(
            [(p.name, p.type) for p in method.parameters],
            [("prefix", "string"), ("limit", "int")],
        )

    def test_params_array_parameter(self):
        source = b"""
class Text
{
    public static string Join(string sep, params object[] args) { return sep; }

    public static int Count(params int[] values) { return 0; }
}
"""
        join, count = _declarations(source)[0].declaration.members
        self.assertEqual(
            [(p.name, p.type) for p in join.parameters],
            [("sep", "string"), ("args", "object[]")],
        )
        self.assertEqual([(p.name, p.type) for p in count.parameters], [("values", "int[]")])

    def test_constructor_is_not_a_method(self):
        self.assertNotIn("Order", [getattr(m, "name", None) for m in self.decl.members])

    def test_nested_types(self):
        self.assertEqual([t.identifier for t in self.decl.nested_types], ["IPart"])
        self.assertEqual(self.decl.nested_types[0].kind, "Interface")


if __name__ == "__main__":
    unittest.main()
