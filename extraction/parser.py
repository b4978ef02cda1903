"""
Tree-sitter parser initialization and file parsing utilities.

This module provides functions to initialize the C# parser and parse source files.
"""

import logging
from typing import Tuple

import tree_sitter_c_sharp as tscsharp
from tree_sitter import Language, Node, Parser, Tree

from core.errors import ParseFailure

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constant
CSHARP_LANGUAGE = Language(tscsharp.language())

# Byte order mark some editors write at the top of .cs files
_UTF8_BOM = b"\xef\xbb\xbf"


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for C#.

    Returns:
        A Parser instance configured with the C# language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"class Foo { }")
    """
    parser = Parser(CSHARP_LANGUAGE)
    logger.debug("Created tree-sitter C# parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of C# source code.

    Args:
        source: UTF-8 encoded bytes of C# source code.

    Returns:
        A Tree object representing the parsed syntax tree.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"namespace A { class B { } }")
        >>> tree.root_node.type
        'compilation_unit'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    if tree.root_node.has_error:
        logger.debug("Parsed tree contains syntax errors")

    logger.debug("Parsed %d bytes of C# code", len(source))
    return tree


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree."""
    count = 0
    stack: list[Node] = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        stack.extend(node.children)
    return count


def read_source(file_path: str) -> bytes:
    """Read a C# source file as UTF-8 bytes, without a leading BOM.

    Raises:
        ParseFailure: If the file is missing, unreadable or not UTF-8 text.
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise ParseFailure(f"Cannot read source file {file_path}: {e}", path=file_path) from e

    if source_bytes.startswith(_UTF8_BOM):
        source_bytes = source_bytes[len(_UTF8_BOM):]

    try:
        source_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.error("File %s is not valid UTF-8: %s", file_path, e)
        raise ParseFailure(f"Source file {file_path} is not UTF-8 text: {e}", path=file_path) from e

    return source_bytes


def parse_file(file_path: str) -> Tuple[Tree, bytes]:
    """Parse a C# source file from disk.

    Args:
        file_path: Path to the .cs file.

    Returns:
        A tuple of (Tree, source_bytes) where:
        - Tree is the parsed syntax tree
        - source_bytes is the file content as bytes (BOM stripped)

    Raises:
        ParseFailure: If the file cannot be read or decoded.

    Example:
        >>> tree, source = parse_file("Models/User.cs")
        >>> tree.root_node.type
        'compilation_unit'
    """
    source_bytes = read_source(file_path)
    tree = parse_bytes(source_bytes)

    if tree.root_node.has_error:
        logger.warning("File %s contains syntax errors", file_path)

    logger.debug("Successfully parsed file: %s", file_path)
    return tree, source_bytes
