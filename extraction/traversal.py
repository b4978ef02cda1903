"""
Declaration tree traversal and TypeEntity extraction.

This module walks the declaration tree produced by ``extraction.syntax`` and
flattens it into namespace-tagged ``TypeEntity`` records, resolving member
visibility and documentation along the way.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from extraction.config import (
    DEFAULT_CLASS_MEMBER_VISIBILITY,
    GLOBAL_NAMESPACE,
    INTERFACE_MEMBER_VISIBILITY,
    VISIBILITY_PRECEDENCE,
)
from extraction.doc_comments import param_descriptions, summary
from extraction.models import Attribute, Method, Parameter, TypeEntity
from extraction.syntax import (
    FieldDecl,
    MemberDeclaration,
    MethodDecl,
    PropertyDecl,
    ScopedTypeDecl,
    TypeDecl,
)

logger = logging.getLogger(__name__)


def resolve_visibility(modifiers: Sequence[str], in_interface: bool) -> str:
    """Resolve the reported visibility of a member.

    Interface members are always reported as public, whatever modifiers they
    carry. Class members report the first explicit access modifier in
    ``public, private, protected, internal`` order, defaulting to private.

    Args:
        modifiers: Modifier keywords of the member.
        in_interface: Whether the declaring type is an interface.

    Returns:
        One of: public, private, protected, internal
    """
    if in_interface:
        return INTERFACE_MEMBER_VISIBILITY
    for keyword in VISIBILITY_PRECEDENCE:
        if keyword in modifiers:
            return keyword
    return DEFAULT_CLASS_MEMBER_VISIBILITY


def qualify_type_name(identifier: str, parent_path: Optional[str]) -> str:
    """Dot-join a nested type's identifier onto its parent's name."""
    if parent_path:
        return f"{parent_path}.{identifier}"
    return identifier


def build_method(decl: MethodDecl, in_interface: bool) -> Method:
    """Build a Method, attaching ``<param>`` descriptions to its parameters."""
    descriptions = param_descriptions(decl)
    return Method(
        name=decl.name,
        return_type=decl.return_type,
        visibility=resolve_visibility(decl.modifiers, in_interface),
        summary=summary(decl),
        parameters=tuple(
            Parameter(
                name=param.name,
                type=param.type,
                summary=descriptions.get(param.name, ""),
            )
            for param in decl.parameters
        ),
    )


def collect_members(
    members: Iterable[MemberDeclaration],
    in_interface: bool,
) -> tuple[List[Attribute], List[Method]]:
    """Split a type's members into attributes and methods, in source order."""
    attributes: List[Attribute] = []
    methods: List[Method] = []

    for member in members:
        match member:
            case PropertyDecl():
                attributes.append(
                    Attribute(
                        name=member.name,
                        type=member.type,
                        visibility=resolve_visibility(member.modifiers, in_interface),
                        summary=summary(member),
                    )
                )
            case FieldDecl():
                visibility = resolve_visibility(member.modifiers, in_interface)
                description = summary(member)
                for name in member.names:
                    attributes.append(
                        Attribute(
                            name=name,
                            type=member.type,
                            visibility=visibility,
                            summary=description,
                        )
                    )
            case MethodDecl():
                methods.append(build_method(member, in_interface))

    return attributes, methods


def extract_type_entities(
    decl: TypeDecl,
    namespace: str,
    parent_path: Optional[str] = None,
    file_path: str = "",
) -> List[TypeEntity]:
    """Extract a type and all types nested in it.

    The type's own entity is appended before any nested type is visited, so
    the result is in pre-order (parent before children, siblings in source
    order).

    Args:
        decl: The class or interface declaration.
        namespace: Namespace all emitted entities belong to.
        parent_path: Full name of the enclosing type, or None at top level.
        file_path: Declaring file, recorded on each entity.

    Returns:
        The extracted entities.
    """
    entities: List[TypeEntity] = []
    # (declaration, parent full name) pairs; popped LIFO so push in reverse
    worklist: List[tuple[TypeDecl, Optional[str]]] = [(decl, parent_path)]

    while worklist:
        current, parent = worklist.pop()
        full_name = qualify_type_name(current.identifier, parent)
        in_interface = current.kind == "Interface"
        attributes, methods = collect_members(current.members, in_interface)

        entities.append(
            TypeEntity(
                name=full_name,
                namespace=namespace,
                kind=current.kind,
                summary=summary(current),
                attributes=tuple(attributes),
                methods=tuple(methods),
                file_path=file_path,
            )
        )
        logger.debug(f"Extracted {current.kind}: {namespace}.{full_name}")

        for nested in reversed(current.nested_types):
            worklist.append((nested, full_name))

    return entities


def extract_entities_from_declarations(
    declarations: Iterable[ScopedTypeDecl],
    file_path: str = "",
) -> List[TypeEntity]:
    """Extract entities for every top-level declaration of a file.

    Declarations outside any namespace are grouped under ``Global``.
    """
    entities: List[TypeEntity] = []
    for scoped in declarations:
        namespace = scoped.namespace or GLOBAL_NAMESPACE
        entities.extend(
            extract_type_entities(scoped.declaration, namespace, file_path=file_path)
        )
    return entities
