"""
Namespace grouping and hierarchical section numbering.

Types are grouped by namespace in first-seen order and numbered
``<start>.<namespace>.<type>``; namespace headers get ``<start>.<namespace>``.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from core.generator_config import parse_start_index
from extraction.models import TypeEntity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumberedSection:
    """A namespace header (two-level path) or type header (three-level path)."""

    path: Tuple[int, ...]
    title: str
    entity: Optional[TypeEntity] = None

    @property
    def label(self) -> str:
        return ".".join(str(part) for part in self.path)

    @property
    def level(self) -> int:
        return len(self.path)

    @property
    def is_namespace(self) -> bool:
        return self.entity is None


def display_namespace(namespace: str) -> str:
    """Render a namespace for headings.

    The first dot segment (the project/root namespace) is dropped and the rest
    joined with ``/``: ``Shop.Domain.Orders`` -> ``Domain/Orders``. A
    single-segment namespace is shown unchanged.
    """
    remainder = namespace.split(".")[1:]
    if not remainder:
        return namespace
    return "/".join(remainder)


def group_by_namespace(entities: Iterable[TypeEntity]) -> List[Tuple[str, List[TypeEntity]]]:
    """Group entities by namespace, keeping first-seen namespace order."""
    groups: Dict[str, List[TypeEntity]] = {}
    for entity in entities:
        groups.setdefault(entity.namespace, []).append(entity)
    return list(groups.items())


def number_sections(entities: Iterable[TypeEntity], start_index: int) -> List[NumberedSection]:
    """Assign hierarchical section numbers to the type model.

    Args:
        entities: Types in model order.
        start_index: Positive top-level section number.

    Returns:
        Each namespace header followed by its types.

    Raises:
        ValidationFailure: If ``start_index`` is not a positive integer.
    """
    start_index = parse_start_index(start_index)

    sections: List[NumberedSection] = []
    for group_index, (namespace, members) in enumerate(group_by_namespace(entities), start=1):
        sections.append(
            NumberedSection(
                path=(start_index, group_index),
                title=display_namespace(namespace),
            )
        )
        for type_index, entity in enumerate(members, start=1):
            sections.append(
                NumberedSection(
                    path=(start_index, group_index, type_index),
                    title=entity.name,
                    entity=entity,
                )
            )

    logger.debug("Numbered %d sections from start index %d", len(sections), start_index)
    return sections
