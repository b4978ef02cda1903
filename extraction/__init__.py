"""
Layer 1: Extraction Engine

Tree-sitter-based C# source parser and type model extractor.
Extracts classes, interfaces, their members and XML documentation comments.
"""

from extraction.models import Attribute, Method, Parameter, TypeEntity
from extraction.parser import create_parser, parse_file, parse_bytes, count_error_nodes
from extraction.syntax import build_declaration_tree
from extraction.traversal import (
    extract_entities_from_declarations,
    extract_type_entities,
    resolve_visibility,
)
from extraction.extractor import (
    build_model,
    extract_file,
    extract_to_dict_list,
    ExtractionStats,
)
from extraction.ignore_rules import IgnoreRuleSet, matches
from extraction.selection import (
    SourceNode,
    build_source_tree,
    filter_types,
    selected_files,
    set_selected,
)

__all__ = [
    # Data models
    "Attribute",
    "Method",
    "Parameter",
    "TypeEntity",
    "ExtractionStats",
    # Low-level parsing
    "create_parser",
    "parse_file",
    "parse_bytes",
    "count_error_nodes",
    "build_declaration_tree",
    # Mid-level extraction
    "extract_type_entities",
    "extract_entities_from_declarations",
    "resolve_visibility",
    # High-level orchestration
    "build_model",
    "extract_file",
    "extract_to_dict_list",
    # Source selection
    "IgnoreRuleSet",
    "matches",
    "SourceNode",
    "build_source_tree",
    "filter_types",
    "selected_files",
    "set_selected",
]
