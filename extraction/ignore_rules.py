"""
Gitignore-style rules deciding which sources are eligible for extraction.

Rules live one per line in ``<root>/generate.ignore``; blank lines and lines
starting with ``#`` are comments. Paths are relative to the root and use
forward slashes.
"""

import logging
import os
import re
from typing import List, Optional, Tuple

from core.errors import IOFailure
from extraction.config import IGNORE_FILE_NAME

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Convert Windows separators to forward slashes."""
    return path.replace("\\", "/")


def wildcard_to_regex(pattern: str) -> str:
    """Translate ``*``/``?`` wildcards into an anchored regular expression."""
    escaped = re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")
    return f"^{escaped}$"


def matches(pattern: str, path: str) -> bool:
    """Evaluate one ignore rule against one relative path.

    The pattern's shape selects the policy, first match wins:

    - ``prefix/**``: the folder itself and everything below it;
    - ``prefix/*``: direct children of the folder only;
    - any ``*`` or ``?``: case-insensitive wildcard over the whole path;
    - otherwise: case-insensitive equality.

    Args:
        pattern: The ignore rule.
        path: Relative path of a file or directory.

    Returns:
        True if the rule matches the path. A wildcard that fails to compile
        never matches.
    """
    pattern = normalize_path(pattern)
    path = normalize_path(path)

    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        return path == prefix or path.startswith(prefix + "/")

    if pattern.endswith("/*"):
        prefix = pattern[:-2]
        return path.startswith(prefix + "/") and "/" not in path[len(prefix) + 1:]

    if "*" in pattern or "?" in pattern:
        try:
            return re.match(wildcard_to_regex(pattern), path, re.IGNORECASE) is not None
        except re.error as e:
            logger.debug("Ignoring malformed wildcard rule %r: %s", pattern, e)
            return False

    return path.lower() == pattern.lower()


class IgnoreRuleSet:
    """Ordered, file-backed collection of ignore rules for one source root.

    Mutations only change the in-memory list; call ``save`` to persist.
    """

    def __init__(self, root: str, load: bool = True):
        self.root = root
        self.store_path = os.path.join(root, IGNORE_FILE_NAME)
        self._rules: List[str] = []
        if load:
            self.load()

    @classmethod
    def for_root(cls, root: str) -> "IgnoreRuleSet":
        """Load the rule set of a (new) source root."""
        return cls(root)

    @property
    def rules(self) -> Tuple[str, ...]:
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, pattern: str) -> bool:
        return pattern in self._rules

    def load(self) -> None:
        """Reload rules from the store; a missing store means no rules.

        Raises:
            IOFailure: If the store exists but cannot be read.
        """
        try:
            with open(self.store_path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except FileNotFoundError:
            logger.debug("No ignore file at %s", self.store_path)
            self._rules = []
            return
        except (OSError, UnicodeDecodeError) as e:
            raise IOFailure(
                f"Cannot read ignore rules from {self.store_path}: {e}",
                path=self.store_path,
            ) from e

        rules: List[str] = []
        for line in lines:
            rule = line.strip()
            if not rule or rule.startswith("#"):
                continue
            rules.append(rule)
        self._rules = rules
        logger.info("Loaded %d ignore rules from %s", len(rules), self.store_path)

    def save(self) -> None:
        """Write the rules to the store, one per line.

        Raises:
            IOFailure: If the store cannot be written.
        """
        try:
            with open(self.store_path, "w", encoding="utf-8", newline="\n") as f:
                for rule in self._rules:
                    f.write(rule + "\n")
        except OSError as e:
            raise IOFailure(
                f"Cannot write ignore rules to {self.store_path}: {e}",
                path=self.store_path,
            ) from e
        logger.info("Saved %d ignore rules to %s", len(self._rules), self.store_path)

    def add_rule(self, pattern: str) -> bool:
        """Append a rule; blank and duplicate rules are silently skipped.

        Returns:
            True if the rule was added.
        """
        pattern = pattern.strip()
        if not pattern or pattern in self._rules:
            return False
        self._rules.append(pattern)
        return True

    def remove_rule(self, pattern: str) -> bool:
        """Remove a rule if present.

        Returns:
            True if a rule was removed.
        """
        try:
            self._rules.remove(pattern)
        except ValueError:
            return False
        return True

    def replace_rule(self, old_pattern: str, new_pattern: str) -> bool:
        """Replace a rule in place, keeping its position.

        If the new rule already exists elsewhere the old entry is dropped
        instead, so the list never holds duplicates.

        Returns:
            True if the list changed.
        """
        new_pattern = new_pattern.strip()
        if old_pattern not in self._rules or not new_pattern:
            return False
        if new_pattern == old_pattern:
            return False
        if new_pattern in self._rules:
            self._rules.remove(old_pattern)
            return True
        index = self._rules.index(old_pattern)
        self._rules[index] = new_pattern
        return True

    def matching_rule(self, relative_path: str) -> Optional[str]:
        """Return the first rule matching the path, or None."""
        if not relative_path:
            return None
        path = normalize_path(relative_path)
        for pattern in self._rules:
            if matches(pattern, path):
                return pattern
        return None

    def is_ignored(self, relative_path: str) -> bool:
        """True iff any rule matches the relative path."""
        return self.matching_rule(relative_path) is not None
