"""
Source selection: which files and types go into the document.

The source root is modelled as an explicit tree of ``SourceNode`` objects.
Selecting or deselecting a directory propagates to everything below it via
``set_selected``; ``selected_files`` then yields the extraction order.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from core.errors import ValidationFailure
from extraction.config import CSHARP_EXTENSIONS, SKIPPED_DIRECTORIES
from extraction.ignore_rules import IgnoreRuleSet
from extraction.models import TypeEntity

logger = logging.getLogger(__name__)


@dataclass
class SourceNode:
    """A file or directory under the source root.

    Attributes:
        path: Absolute path on disk.
        relative_path: Path relative to the root, forward slashes ("" for root).
        is_directory: Whether the node is a directory.
        selected: Whether the node is part of the selection.
        children: Subdirectories first, then files, each sorted by name.
    """

    path: str
    relative_path: str
    is_directory: bool
    selected: bool = True
    children: List["SourceNode"] = field(default_factory=list)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


def _is_skipped_directory(name: str) -> bool:
    return name.startswith(".") or name.lower() in SKIPPED_DIRECTORIES


def _join_relative(parent: str, name: str) -> str:
    return f"{parent}/{name}" if parent else name


def _populate(node: SourceNode, rules: Optional[IgnoreRuleSet]) -> None:
    try:
        with os.scandir(node.path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.warning("Cannot list directory %s: %s", node.path, e)
        return

    directories = [e for e in entries if e.is_dir() and not _is_skipped_directory(e.name)]
    files = [
        e
        for e in entries
        if e.is_file() and os.path.splitext(e.name)[1].lower() in CSHARP_EXTENSIONS
    ]

    for entry in directories:
        relative = _join_relative(node.relative_path, entry.name)
        if rules is not None and rules.is_ignored(relative):
            logger.debug("Ignoring directory %s", relative)
            continue
        child = SourceNode(entry.path, relative, is_directory=True)
        _populate(child, rules)
        node.children.append(child)

    for entry in files:
        relative = _join_relative(node.relative_path, entry.name)
        if rules is not None and rules.is_ignored(relative):
            logger.debug("Ignoring file %s", relative)
            continue
        node.children.append(SourceNode(entry.path, relative, is_directory=False))


def build_source_tree(root: str, rules: Optional[IgnoreRuleSet] = None) -> SourceNode:
    """Scan a source root into a selection tree.

    Hidden directories and ``bin``/``obj`` build outputs are skipped. Rules are
    checked against each directory before descending, so a directory matched
    by any rule is pruned with everything below it: ``Tests/*`` matches the
    directory ``Tests/Unit`` and so drops ``Tests/Unit/X.cs`` as well. Only
    ``.cs`` files are kept. Every node starts selected.

    Raises:
        ValidationFailure: If the root is not an existing directory.
    """
    if not root or not os.path.isdir(root):
        raise ValidationFailure(f"Source folder not found: {root}")

    root = os.path.abspath(root)
    tree = SourceNode(root, "", is_directory=True)
    _populate(tree, rules)
    logger.info("Found %d C# files under %s", len(list(iter_files(tree))), root)
    return tree


def set_selected(node: SourceNode, selected: bool) -> None:
    """Select or deselect a node; directories propagate to all descendants."""
    node.selected = selected
    if node.is_directory:
        for child in node.children:
            set_selected(child, selected)


def find_node(node: SourceNode, relative_path: str) -> Optional[SourceNode]:
    """Find a node by its root-relative path."""
    target = relative_path.replace("\\", "/").strip("/")
    if node.relative_path == target:
        return node
    for child in node.children:
        if child.relative_path == target or target.startswith(child.relative_path + "/"):
            found = find_node(child, target)
            if found is not None:
                return found
    return None


def iter_files(node: SourceNode) -> Iterable[SourceNode]:
    """Yield file nodes in pre-order."""
    if not node.is_directory:
        yield node
        return
    for child in node.children:
        yield from iter_files(child)


def selected_files(node: SourceNode) -> List[str]:
    """Absolute paths of selected files, in tree order."""
    return [n.path for n in iter_files(node) if n.selected]


def filter_types(
    entities: Iterable[TypeEntity],
    include: Iterable[str] = (),
    exclude: Iterable[str] = (),
) -> List[TypeEntity]:
    """Narrow the extracted model to the chosen types.

    Args:
        entities: Extracted types, in model order.
        include: Case-insensitive substrings of the type name; when given, a
            type is kept if any of them matches.
        exclude: Namespace-qualified full names to drop.

    Returns:
        The kept types, order preserved.
    """
    queries = [q.strip().lower() for q in include if q.strip()]
    excluded = {name.strip() for name in exclude}

    kept: List[TypeEntity] = []
    for entity in entities:
        if entity.full_name in excluded:
            continue
        if queries and not any(q in entity.name.lower() for q in queries):
            continue
        kept.append(entity)
    return kept
