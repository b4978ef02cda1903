"""
Data models for extracted C# types and their members.
"""

from dataclasses import dataclass, asdict, field
from typing import Dict, Any, Tuple


@dataclass(frozen=True)
class Parameter:
    """A method parameter.

    Attributes:
        name: Parameter identifier.
        type: Declared type text (e.g. ``List<string>``).
        summary: Description from the method's ``<param>`` doc element, or "".
    """

    name: str
    type: str
    summary: str = ""


@dataclass(frozen=True)
class Attribute:
    """A field or property member of a type."""

    name: str
    type: str
    visibility: str
    summary: str = ""


@dataclass(frozen=True)
class Method:
    """A method member of a type."""

    name: str
    return_type: str
    visibility: str
    summary: str = ""
    parameters: Tuple[Parameter, ...] = ()


@dataclass(frozen=True)
class TypeEntity:
    """Represents a single extracted C# class or interface.

    Attributes:
        name: Dot-joined nesting path (e.g. ``Outer.Inner``).
        namespace: Qualified namespace, or ``Global`` for top-level types.
        kind: One of: Class, Interface
        summary: Text of the type's ``<summary>`` doc element, or "".
        attributes: Fields and properties in declaration order.
        methods: Methods in declaration order.
        file_path: Path of the declaring file, relative to the source root.
    """

    name: str
    namespace: str
    kind: str
    summary: str = ""
    attributes: Tuple[Attribute, ...] = ()
    methods: Tuple[Method, ...] = ()
    file_path: str = field(default="", compare=False)

    @property
    def full_name(self) -> str:
        """Namespace-qualified name, used to address a type for selection."""
        return f"{self.namespace}.{self.name}"

    @property
    def is_interface(self) -> bool:
        return self.kind == "Interface"

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entity to a dictionary suitable for JSON serialization.

        Returns:
            Dictionary representation of the entity, members included.
        """
        return asdict(self)
