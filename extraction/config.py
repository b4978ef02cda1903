"""
Configuration constants for C# declaration extraction.

Defines the tree-sitter node type strings used to walk the C# syntax tree.
"""

from typing import Set

# Type declarations we extract as TypeEntity records
TARGET_TYPE_NODES: Set[str] = {
    "class_declaration",
    "interface_declaration",
}

# Type declarations that are recognized but not documented
SKIPPED_TYPE_NODES: Set[str] = {
    "struct_declaration",
    "record_declaration",
    "record_struct_declaration",
    "enum_declaration",
    "delegate_declaration",
}

# Block-bodied and file-scoped namespace node types
NAMESPACE_NODE: str = "namespace_declaration"
FILE_SCOPED_NAMESPACE_NODE: str = "file_scoped_namespace_declaration"

# Comment node type (includes //, ///, /* */)
COMMENT_NODE: str = "comment"

# Modifier node type ("public", "static", ...)
MODIFIER_NODE: str = "modifier"

# Member declaration node types
PROPERTY_NODE: str = "property_declaration"
FIELD_NODE: str = "field_declaration"
METHOD_NODE: str = "method_declaration"
VARIABLE_DECLARATION_NODE: str = "variable_declaration"
VARIABLE_DECLARATOR_NODE: str = "variable_declarator"
PARAMETER_NODE: str = "parameter"
# Older grammars wrap `params T[] name` in its own node; newer ones leave
# the type and identifier as bare children of the parameter list
PARAMETER_ARRAY_NODE: str = "parameter_array"

# Containers whose children we scan for declarations
CONTAINER_TYPES: Set[str] = {
    "compilation_unit",   # File root
    "declaration_list",   # Namespace/type body
}

# Preprocessor blocks that may wrap declarations
PREPROCESSOR_CONTAINERS: Set[str] = {
    "preproc_if",
    "preproc_elif",
    "preproc_else",
}

# XML documentation comment prefix
DOC_COMMENT_PREFIX: str = "///"

# Namespace used for declarations outside any namespace
GLOBAL_NAMESPACE: str = "Global"

# C# file extensions
CSHARP_EXTENSIONS: Set[str] = {
    ".cs",
}

# Build output directories never scanned for sources
SKIPPED_DIRECTORIES: Set[str] = {
    "bin",
    "obj",
}

# Entity kind mapping (node type -> TypeEntity kind)
TYPE_KIND_MAP: dict = {
    "class_declaration": "Class",
    "interface_declaration": "Interface",
}

# Explicit access modifiers in resolution precedence order
VISIBILITY_PRECEDENCE: tuple = (
    "public",
    "private",
    "protected",
    "internal",
)

DEFAULT_CLASS_MEMBER_VISIBILITY: str = "private"
INTERFACE_MEMBER_VISIBILITY: str = "public"

# Ignore-rule store, relative to the extraction root
IGNORE_FILE_NAME: str = "generate.ignore"

# Extraction policy defaults
DEFAULT_CONTINUE_ON_ERROR: bool = False
DEFAULT_STRICT_SYNTAX: bool = False
