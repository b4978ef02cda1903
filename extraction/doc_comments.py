"""
XML documentation comment collection and resolution.

C# documents declarations with runs of ``///`` line comments holding XML
(``<summary>``, ``<param name="x">``, ...). The parser adapter collects the
raw run preceding each declaration; the resolvers below turn it into the
summary text and per-parameter descriptions used by the document.
"""

import logging
import re
from typing import Dict, Optional
from xml.sax.saxutils import unescape

from tree_sitter import Node

from extraction.config import COMMENT_NODE, DOC_COMMENT_PREFIX

logger = logging.getLogger(__name__)

_SPACE_RE = re.compile(r"\s+")
_SUMMARY_RE = re.compile(r"<summary\s*>(.*?)</summary\s*>", re.DOTALL)
_PARAM_RE = re.compile(
    r"<param\s+name\s*=\s*[\"']([^\"']*)[\"']\s*>(.*?)</param\s*>",
    re.DOTALL,
)
# <see cref="X"/>, <paramref name="x"/>, <see langword="null"/> ...
_REFERENCE_TAG_RE = re.compile(
    r"<\w+\s+(?:cref|name|langword|href)\s*=\s*[\"']([^\"']*)[\"']\s*/>"
)
_CREF_PREFIX_RE = re.compile(r"^[A-Z]:")
_BLOCK_TAG_RE = re.compile(r"</?(?:para|br|list|item|term|description)\b[^<>]*>")
_ANY_TAG_RE = re.compile(r"</?[\w:]+(?:\s+[^<>]*?)?/?>")
_ENTITIES = {"&quot;": '"', "&apos;": "'"}


def is_doc_comment(comment_text: str) -> bool:
    """Check if a comment is a C# XML documentation comment.

    Args:
        comment_text: The text content of the comment.

    Returns:
        True for ``///`` comments, False for ``//``, ``////`` and block comments.
    """
    stripped = comment_text.strip()
    return stripped.startswith(DOC_COMMENT_PREFIX) and not stripped.startswith("////")


def clean_doc_comment(comment_text: str) -> str:
    """Strip ``///`` markers from every line of a doc comment run.

    Args:
        comment_text: Raw comment lines, newline separated.

    Returns:
        Marker-free text; blank lines are dropped.
    """
    cleaned_lines = []
    for line in comment_text.split("\n"):
        stripped = line.strip()
        if stripped.startswith(DOC_COMMENT_PREFIX):
            stripped = stripped[len(DOC_COMMENT_PREFIX):]
        stripped = stripped.strip()
        if stripped:
            cleaned_lines.append(stripped)
    return "\n".join(cleaned_lines)


def get_preceding_doc_comment(node: Node) -> Optional[str]:
    """Collect the ``///`` comment run immediately preceding a declaration.

    Walks backward through line-adjacent sibling comments; a blank line ends
    the run. Ordinary ``//`` comments inside the run are
    stepped over but not collected.

    Args:
        node: The declaration node.

    Returns:
        Cleaned documentation text, or None if the declaration is undocumented.
    """
    comments = []
    sibling = node.prev_named_sibling
    expected_end_row = node.start_point.row

    while sibling is not None and sibling.type == COMMENT_NODE:
        gap = expected_end_row - sibling.end_point.row
        if gap > 1:
            break

        comment_text = sibling.text.decode("utf-8") if sibling.text else ""
        if is_doc_comment(comment_text):
            comments.append(comment_text)

        expected_end_row = sibling.start_point.row
        sibling = sibling.prev_named_sibling

    if not comments:
        return None

    comments.reverse()
    return clean_doc_comment("\n".join(comments))


def render_doc_text(fragment: str) -> str:
    """Flatten an XML doc fragment to plain text.

    Reference tags render as their target (``<see cref="T:Foo"/>`` -> ``Foo``),
    other tags are dropped, entities are unescaped and whitespace collapsed.
    """
    text = _REFERENCE_TAG_RE.sub(
        lambda m: _CREF_PREFIX_RE.sub("", m.group(1)), fragment
    )
    text = _BLOCK_TAG_RE.sub(" ", text)
    text = _ANY_TAG_RE.sub("", text)
    text = unescape(text, _ENTITIES)
    return _SPACE_RE.sub(" ", text).strip()


def extract_summary(doc_text: Optional[str]) -> str:
    """Return the text of the first ``<summary>`` element, or ""."""
    if not doc_text:
        return ""
    match = _SUMMARY_RE.search(doc_text)
    if match is None:
        return ""
    return render_doc_text(match.group(1))


def extract_param_descriptions(doc_text: Optional[str]) -> Dict[str, str]:
    """Map every ``<param name="x">`` element to its flattened text."""
    result: Dict[str, str] = {}
    if not doc_text:
        return result
    for match in _PARAM_RE.finditer(doc_text):
        name = match.group(1).strip()
        if name:
            result[name] = render_doc_text(match.group(2))
    return result


def summary(declaration) -> str:
    """Summary of a parsed declaration (type or member)."""
    return extract_summary(getattr(declaration, "doc_comment", None))


def param_descriptions(declaration) -> Dict[str, str]:
    """Parameter descriptions of a parsed method declaration."""
    return extract_param_descriptions(getattr(declaration, "doc_comment", None))
