"""
High-level orchestrator for C# type model extraction.

This module provides the main entry points for building the ordered
``TypeEntity`` model from a single file or an ordered list of files.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from core.errors import ParseFailure
from core.structured_logging import source_scope
from extraction.config import (
    CSHARP_EXTENSIONS,
    DEFAULT_CONTINUE_ON_ERROR,
    DEFAULT_STRICT_SYNTAX,
)
from extraction.models import TypeEntity
from extraction.parser import count_error_nodes, parse_file
from extraction.syntax import build_declaration_tree
from extraction.traversal import extract_entities_from_declarations

logger = logging.getLogger(__name__)


@dataclass
class FileExtractionDiagnostics:
    """Per-file extraction diagnostics."""

    entities: List[TypeEntity]
    parse_error_count: int


class ExtractionStats:
    """Statistics for an extraction run."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.types_extracted = 0
        self.parse_errors = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "types_extracted": self.types_extracted,
            "parse_errors": self.parse_errors,
        }

    def __str__(self) -> str:
        return (
            f"ExtractionStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, types={self.types_extracted}, "
            f"parse_errors={self.parse_errors})"
        )


def relative_source_path(file_path: str, root: Optional[str]) -> str:
    """Path of a source file relative to the root, with forward slashes."""
    if root is None:
        return os.path.basename(file_path)
    try:
        relative = os.path.relpath(file_path, os.path.abspath(root))
    except ValueError:
        logger.warning(
            "Cannot compute relative path for %s from %s. Using absolute path.",
            file_path,
            root,
        )
        relative = file_path
    return relative.replace(os.sep, "/")


def _extract_file_with_diagnostics(
    file_path: str,
    root: Optional[str],
    strict_syntax: bool,
) -> FileExtractionDiagnostics:
    """Extract the type model of a single file with parse diagnostics."""
    file_path = os.path.abspath(file_path)

    ext = os.path.splitext(file_path)[1].lower()
    if ext not in CSHARP_EXTENSIONS:
        raise ParseFailure(
            f"File {file_path} is not a C# source file. "
            f"Expected one of: {sorted(CSHARP_EXTENSIONS)}",
            path=file_path,
        )

    relative_path = relative_source_path(file_path, root)

    with source_scope(relative_path):
        logger.info("Extracting types from %s", relative_path)

        tree, _ = parse_file(file_path)
        parse_error_count = count_error_nodes(tree)

        if tree.root_node.has_error:
            if strict_syntax:
                raise ParseFailure(
                    f"File {relative_path} contains syntax errors "
                    f"({parse_error_count} error nodes)",
                    path=file_path,
                )
            logger.warning(
                "File %s contains syntax errors (%d error nodes)",
                relative_path,
                parse_error_count,
            )

        declarations = build_declaration_tree(tree)
        entities = extract_entities_from_declarations(declarations, file_path=relative_path)
        logger.info("Extracted %d types from %s", len(entities), relative_path)

    return FileExtractionDiagnostics(
        entities=entities,
        parse_error_count=parse_error_count,
    )


def extract_file(
    file_path: str,
    root: Optional[str] = None,
    strict_syntax: bool = DEFAULT_STRICT_SYNTAX,
) -> List[TypeEntity]:
    """Extract all classes and interfaces from a single C# source file.

    Args:
        file_path: Absolute or relative path to the .cs file.
        root: Source root used for relative paths. If None, only the file
            name is recorded.
        strict_syntax: Treat syntax errors in the file as a parse failure.

    Returns:
        Extracted types in pre-order declaration order.

    Raises:
        ParseFailure: If the file is missing, unreadable, not a .cs file, or
            (with ``strict_syntax``) contains syntax errors.

    Example:
        >>> entities = extract_file("src/Models/User.cs", "src")
        >>> [e.name for e in entities]
        ['User', 'User.Address']
    """
    try:
        diagnostics = _extract_file_with_diagnostics(
            file_path=file_path,
            root=root,
            strict_syntax=strict_syntax,
        )
        return diagnostics.entities

    except ParseFailure as e:
        logger.error("Error extracting types from %s: %s", file_path, e)
        raise


def build_model(
    files: Iterable[str],
    root: Optional[str] = None,
    continue_on_error: bool = DEFAULT_CONTINUE_ON_ERROR,
    strict_syntax: bool = DEFAULT_STRICT_SYNTAX,
) -> tuple[List[TypeEntity], ExtractionStats]:
    """Build the ordered type model for a list of files.

    Files are processed strictly in the order given and entities keep file
    order, then declaration order within a file.

    Args:
        files: Ordered source file paths.
        root: Source root used for relative paths in entities and logs.
        continue_on_error: If True, log and skip files that fail to parse.
            If False, the first failure aborts the run.
        strict_syntax: Treat files with syntax errors as parse failures.

    Returns:
        A tuple of (entities, stats).

    Raises:
        ParseFailure: On the first failing file when ``continue_on_error``
            is False.

    Example:
        >>> entities, stats = build_model(["a/Foo.cs", "a/Bar.cs"], root="a")
        >>> print(f"Extracted {stats.types_extracted} types")
    """
    stats = ExtractionStats()
    all_entities: List[TypeEntity] = []
    file_list = list(files)

    logger.info("Building type model from %d files", len(file_list))

    for file_path in file_list:
        try:
            diagnostics = _extract_file_with_diagnostics(
                file_path=file_path,
                root=root,
                strict_syntax=strict_syntax,
            )
        except ParseFailure as e:
            stats.files_failed += 1
            if not continue_on_error:
                logger.error("Aborting run: %s", e)
                raise
            logger.error("Skipping %s: %s", file_path, e)
            continue

        all_entities.extend(diagnostics.entities)
        stats.files_processed += 1
        stats.types_extracted += len(diagnostics.entities)
        stats.parse_errors += diagnostics.parse_error_count

    logger.info(f"Extraction complete: {stats}")
    return all_entities, stats


def extract_to_dict_list(
    files: Iterable[str],
    root: Optional[str] = None,
    continue_on_error: bool = DEFAULT_CONTINUE_ON_ERROR,
) -> List[Dict[str, Any]]:
    """Build the type model and return it as a list of dictionaries.

    Example:
        >>> entities = extract_to_dict_list(["src/Foo.cs"], "src")
        >>> import json
        >>> json.dump(entities, open("model.json", "w"), indent=2)
    """
    entities, stats = build_model(files, root, continue_on_error=continue_on_error)
    logger.info(f"Extraction stats: {stats}")
    return [entity.to_dict() for entity in entities]
