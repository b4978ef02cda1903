"""
Declaration tree built from the tree-sitter C# syntax tree.

The extractor never inspects raw tree-sitter nodes. This module walks the
concrete syntax tree once and produces a small, read-only declaration tree:
namespace-scoped type declarations, each carrying its modifiers, leading
documentation text, members and nested types. Members form a closed variant,
``MemberDeclaration = PropertyDecl | FieldDecl | MethodDecl``.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from tree_sitter import Node, Tree

from extraction.config import (
    COMMENT_NODE,
    CONTAINER_TYPES,
    FIELD_NODE,
    FILE_SCOPED_NAMESPACE_NODE,
    METHOD_NODE,
    MODIFIER_NODE,
    NAMESPACE_NODE,
    PARAMETER_ARRAY_NODE,
    PARAMETER_NODE,
    PREPROCESSOR_CONTAINERS,
    PROPERTY_NODE,
    SKIPPED_TYPE_NODES,
    TARGET_TYPE_NODES,
    TYPE_KIND_MAP,
    VARIABLE_DECLARATION_NODE,
    VARIABLE_DECLARATOR_NODE,
)
from extraction.doc_comments import get_preceding_doc_comment

logger = logging.getLogger(__name__)
_SPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ParameterDecl:
    name: str
    type: str


@dataclass(frozen=True)
class PropertyDecl:
    name: str
    type: str
    modifiers: Tuple[str, ...] = ()
    doc_comment: Optional[str] = None


@dataclass(frozen=True)
class FieldDecl:
    """A field declaration; ``int a, b;`` declares two names."""

    names: Tuple[str, ...]
    type: str
    modifiers: Tuple[str, ...] = ()
    doc_comment: Optional[str] = None


@dataclass(frozen=True)
class MethodDecl:
    name: str
    return_type: str
    parameters: Tuple[ParameterDecl, ...] = ()
    modifiers: Tuple[str, ...] = ()
    doc_comment: Optional[str] = None


MemberDeclaration = Union[PropertyDecl, FieldDecl, MethodDecl]


@dataclass(frozen=True)
class TypeDecl:
    """A class or interface declaration with its direct members."""

    kind: str
    identifier: str
    modifiers: Tuple[str, ...] = ()
    doc_comment: Optional[str] = None
    members: Tuple[MemberDeclaration, ...] = ()
    nested_types: Tuple["TypeDecl", ...] = ()
    start_line: int = 0


@dataclass(frozen=True)
class ScopedTypeDecl:
    """A top-level type declaration and its enclosing namespace.

    ``namespace`` is None for declarations outside any namespace.
    """

    namespace: Optional[str]
    declaration: TypeDecl


def node_text(node: Optional[Node]) -> str:
    """Decode a node's source text with whitespace runs collapsed."""
    if node is None or not node.text:
        return ""
    return _SPACE_RE.sub(" ", node.text.decode("utf-8")).strip()


def get_modifiers(node: Node) -> Tuple[str, ...]:
    """Return the modifier keywords of a declaration, in source order."""
    return tuple(
        node_text(child) for child in node.named_children if child.type == MODIFIER_NODE
    )


def _identifier_of(node: Node) -> str:
    """Name of a declaration, via the ``name`` field or the first identifier."""
    name_node = node.child_by_field_name("name")
    if name_node is not None:
        return node_text(name_node)
    for child in node.named_children:
        if child.type == "identifier":
            return node_text(child)
    return ""


def build_parameter(node: Node) -> ParameterDecl:
    return ParameterDecl(
        name=_identifier_of(node),
        type=node_text(node.child_by_field_name("type")),
    )


def build_parameters(parameter_list: Node) -> List[ParameterDecl]:
    """Build the parameters of a parameter list, in source order.

    A ``params T[] name`` parameter is not a ``parameter`` node: its type
    node and identifier sit directly under the list (or under a
    ``parameter_array`` node), so a bare type is paired with the identifier
    that follows it.
    """
    parameters: List[ParameterDecl] = []
    pending_type: Optional[Node] = None

    for child in parameter_list.named_children:
        if child.type == PARAMETER_NODE:
            parameters.append(build_parameter(child))
            pending_type = None
        elif child.type == PARAMETER_ARRAY_NODE:
            parameters.extend(build_parameters(child))
            pending_type = None
        elif child.type in (COMMENT_NODE, "attribute_list"):
            continue
        elif child.type == "identifier" and pending_type is not None:
            parameters.append(ParameterDecl(name=node_text(child), type=node_text(pending_type)))
            pending_type = None
        else:
            pending_type = child

    return parameters


def build_property(node: Node) -> PropertyDecl:
    return PropertyDecl(
        name=_identifier_of(node),
        type=node_text(node.child_by_field_name("type")),
        modifiers=get_modifiers(node),
        doc_comment=get_preceding_doc_comment(node),
    )


def build_field(node: Node) -> Optional[FieldDecl]:
    """Build a field declaration, one name per variable declarator."""
    variable_declaration = None
    for child in node.named_children:
        if child.type == VARIABLE_DECLARATION_NODE:
            variable_declaration = child
            break
    if variable_declaration is None:
        logger.debug(f"Field at line {node.start_point.row + 1} has no variable declaration")
        return None

    names = tuple(
        _identifier_of(child)
        for child in variable_declaration.named_children
        if child.type == VARIABLE_DECLARATOR_NODE
    )
    names = tuple(name for name in names if name)
    if not names:
        return None

    return FieldDecl(
        names=names,
        type=node_text(variable_declaration.child_by_field_name("type")),
        modifiers=get_modifiers(node),
        doc_comment=get_preceding_doc_comment(node),
    )


def build_method(node: Node) -> MethodDecl:
    # Older grammar releases expose the return type as "type"
    return_type = node.child_by_field_name("returns")
    if return_type is None:
        return_type = node.child_by_field_name("type")

    parameters: List[ParameterDecl] = []
    parameter_list = node.child_by_field_name("parameters")
    if parameter_list is not None:
        parameters = build_parameters(parameter_list)

    return MethodDecl(
        name=_identifier_of(node),
        return_type=node_text(return_type),
        parameters=tuple(parameters),
        modifiers=get_modifiers(node),
        doc_comment=get_preceding_doc_comment(node),
    )


def _declaration_children(body: Optional[Node]) -> List[Node]:
    """Named children of a body, looking through preprocessor blocks."""
    if body is None:
        return []
    result: List[Node] = []
    for child in body.named_children:
        if child.type in PREPROCESSOR_CONTAINERS:
            result.extend(_declaration_children(child))
        elif child.type != COMMENT_NODE:
            result.append(child)
    return result


def build_type(node: Node) -> TypeDecl:
    """Build a class/interface declaration, recursing into nested types."""
    members: List[MemberDeclaration] = []
    nested: List[TypeDecl] = []

    for child in _declaration_children(node.child_by_field_name("body")):
        if child.type == PROPERTY_NODE:
            members.append(build_property(child))
        elif child.type == FIELD_NODE:
            field_decl = build_field(child)
            if field_decl is not None:
                members.append(field_decl)
        elif child.type == METHOD_NODE:
            members.append(build_method(child))
        elif child.type in TARGET_TYPE_NODES:
            nested.append(build_type(child))
        elif child.type in SKIPPED_TYPE_NODES:
            logger.debug(
                f"Skipping nested {child.type} at line {child.start_point.row + 1}"
            )

    return TypeDecl(
        kind=TYPE_KIND_MAP[node.type],
        identifier=_identifier_of(node),
        modifiers=get_modifiers(node),
        doc_comment=get_preceding_doc_comment(node),
        members=tuple(members),
        nested_types=tuple(nested),
        start_line=node.start_point.row + 1,
    )


def _qualify(namespace_stack: List[str]) -> Optional[str]:
    return ".".join(namespace_stack) if namespace_stack else None


def collect_type_declarations(
    node: Node,
    namespace_stack: Optional[List[str]] = None,
) -> List[ScopedTypeDecl]:
    """Recursively collect top-level type declarations under a container.

    Block namespaces recurse with an extended stack. A file-scoped namespace
    applies to its own children (older grammars) and to every following
    sibling in the same container (current grammars).

    Args:
        node: Container node (compilation unit, namespace body, ...).
        namespace_stack: Enclosing namespace names, outermost first.

    Returns:
        Type declarations in source (pre-order) order.
    """
    namespace_stack = list(namespace_stack or [])
    declarations: List[ScopedTypeDecl] = []

    for child in node.named_children:
        if child.type in TARGET_TYPE_NODES:
            declarations.append(
                ScopedTypeDecl(namespace=_qualify(namespace_stack), declaration=build_type(child))
            )

        elif child.type == NAMESPACE_NODE:
            name = node_text(child.child_by_field_name("name"))
            body = child.child_by_field_name("body")
            if body is not None:
                declarations.extend(
                    collect_type_declarations(body, namespace_stack + [name])
                )

        elif child.type == FILE_SCOPED_NAMESPACE_NODE:
            name = node_text(child.child_by_field_name("name"))
            namespace_stack = namespace_stack + [name]
            declarations.extend(collect_type_declarations(child, namespace_stack))

        elif child.type in PREPROCESSOR_CONTAINERS or child.type in CONTAINER_TYPES:
            declarations.extend(collect_type_declarations(child, namespace_stack))

        elif child.type in SKIPPED_TYPE_NODES:
            logger.debug(f"Skipping {child.type} at line {child.start_point.row + 1}")

    return declarations


def build_declaration_tree(tree: Tree) -> List[ScopedTypeDecl]:
    """Build the declaration tree for a parsed C# file.

    This is the main entry point of the parser adapter.
    """
    return collect_type_declarations(tree.root_node)
