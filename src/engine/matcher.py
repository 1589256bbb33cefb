"""
Matcher — resolve a key/label search to a single focus node.

Both queries are optional and case-insensitive.  ``*`` is a wildcard for
"zero or more characters":

  key query    no ``*`` -> exact equality      with ``*`` -> anchored pattern
  label query  no ``*`` -> substring           with ``*`` -> anchored pattern

When both queries are given a node must satisfy both rules.  Among
several candidates the first one in store order wins; there is no
ranking.  The matcher never raises: a miss is reported as NOT_FOUND and
an empty search as EMPTY.
"""

import re
from dataclasses import dataclass
from enum import Enum

from src.engine.graph_store import GraphStore
from src.shared.models import Node

WILDCARD = "*"


class MatchStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    EMPTY = "empty"


@dataclass(frozen=True)
class MatchResult:
    status: MatchStatus
    node: Node | None = None

    @property
    def found(self) -> bool:
        return self.status is MatchStatus.FOUND


def normalize_query(query: str | None) -> str | None:
    """Strip a query; blank input counts as "not supplied"."""
    if query is None:
        return None
    query = query.strip()
    return query or None


def compile_wildcard(pattern: str) -> re.Pattern[str]:
    """Compile a ``*`` pattern into an anchored regex over casefolded text.

    Every other character is matched literally.  Match it against
    ``text.casefold()`` so wildcard and plain queries fold case the same way.
    """
    body = ".*".join(re.escape(part) for part in pattern.casefold().split(WILDCARD))
    return re.compile(f"^{body}$", re.IGNORECASE | re.DOTALL)


def _key_rule(query: str):
    if WILDCARD in query:
        regex = compile_wildcard(query)
        return lambda node: regex.match(node.key.casefold()) is not None
    folded = query.casefold()
    return lambda node: node.key.casefold() == folded


def _label_rule(query: str):
    if WILDCARD in query:
        regex = compile_wildcard(query)
        return lambda node: regex.match((node.label or "").casefold()) is not None
    folded = query.casefold()
    return lambda node: folded in (node.label or "").casefold()


class Matcher:
    """Resolves search queries against a GraphStore."""

    def __init__(self, store: GraphStore) -> None:
        self._store = store

    def _rules(self, key_query: str | None, label_query: str | None) -> list:
        rules = []
        key_query = normalize_query(key_query)
        label_query = normalize_query(label_query)
        if key_query is not None:
            rules.append(_key_rule(key_query))
        if label_query is not None:
            rules.append(_label_rule(label_query))
        return rules

    def find_all(self, key_query: str | None = None, label_query: str | None = None) -> list[Node]:
        """Every matching node, in store order (empty for an empty search)."""
        rules = self._rules(key_query, label_query)
        if not rules:
            return []
        return [n for n in self._store.nodes if all(rule(n) for rule in rules)]

    def match(self, key_query: str | None = None, label_query: str | None = None) -> MatchResult:
        """Resolve the search to the first matching node."""
        rules = self._rules(key_query, label_query)
        if not rules:
            return MatchResult(MatchStatus.EMPTY)
        for node in self._store.nodes:
            if all(rule(node) for rule in rules):
                return MatchResult(MatchStatus.FOUND, node)
        return MatchResult(MatchStatus.NOT_FOUND)
