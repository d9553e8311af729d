# pslcheck/rules.py
"""
Public Suffix List rule table.

The table is built once from the raw list text and is read-only afterwards:
every container it exposes is immutable, so any number of threads can query
it without locking.
"""
import logging
import os
import pkgutil
from collections import Counter, defaultdict
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, Tuple

from pslcheck.config import PSL_PATH
from pslcheck.errors import MalformedRuleError

logger = logging.getLogger(__name__)

# tldextract ships the list it falls back to when offline
SNAPSHOT_PACKAGE = "tldextract"
SNAPSHOT_RESOURCE = ".tld_set_snapshot"


class RuleKind(Enum):
    PLAIN = "PLAIN"
    WILDCARD = "WILDCARD"
    EXCEPTION = "EXCEPTION"


class Origin(str, Enum):
    """Which part of the list a suffix comes from. Values are the wire names."""

    ICANN = "ICANN"
    PRIVATE_ENTITY = "PRIVATE_ENTITY"
    NONE = "NONE"


_BEGIN, _END = "begin", "end"

_SECTION_MARKERS = {
    "// ===BEGIN ICANN DOMAINS===": (_BEGIN, Origin.ICANN),
    "// ===END ICANN DOMAINS===": (_END, Origin.ICANN),
    "// ===BEGIN PRIVATE DOMAINS===": (_BEGIN, Origin.PRIVATE_ENTITY),
    "// ===END PRIVATE DOMAINS===": (_END, Origin.PRIVATE_ENTITY),
}


@dataclass(frozen=True)
class Rule:
    labels: Tuple[str, ...]  # top-level label last
    kind: RuleKind
    origin: Origin

    def __post_init__(self):
        if not self.labels:
            raise ValueError("rule needs at least one label")

    @property
    def top_label(self) -> str:
        return self.labels[-1]

    def __str__(self):
        pattern = ".".join(self.labels)
        if self.kind is RuleKind.WILDCARD:
            return "*." + pattern
        if self.kind is RuleKind.EXCEPTION:
            return "!" + pattern
        return pattern


def parse_rule(text: str, origin: Origin) -> Rule:
    """Parse a single rule token such as ``co.uk``, ``*.ck`` or ``!www.ck``."""
    if origin not in (Origin.ICANN, Origin.PRIVATE_ENTITY):
        raise MalformedRuleError(f"rule origin must be ICANN or PRIVATE_ENTITY, got {origin}")

    if text.startswith("!"):
        kind, pattern = RuleKind.EXCEPTION, text[1:]
    elif text.startswith("*."):
        kind, pattern = RuleKind.WILDCARD, text[2:]
    else:
        kind, pattern = RuleKind.PLAIN, text

    if not pattern:
        raise MalformedRuleError("empty rule pattern")

    labels = tuple(pattern.lower().split("."))
    for label in labels:
        if not label:
            raise MalformedRuleError("empty label in rule")
        if "*" in label or "!" in label:
            raise MalformedRuleError(f"unexpected wildcard or exception marker in label {label!r}")

    # an exception removes one label, so it needs something left over
    if kind is RuleKind.EXCEPTION and len(labels) < 2:
        raise MalformedRuleError("exception rule needs at least two labels")

    return Rule(labels, kind, origin)


class RuleTable:
    """Rules grouped by their top-level label."""

    __slots__ = ("_rules", "_size")

    _EMPTY: FrozenSet[Rule] = frozenset()

    def __init__(self, rules_by_top_label: Dict[str, Iterable[Rule]]):
        self._rules = MappingProxyType(
            {top: frozenset(rules) for top, rules in rules_by_top_label.items() if rules}
        )
        self._size = sum(len(rules) for rules in self._rules.values())

    @classmethod
    def from_rules(cls, rules: Iterable[Rule]) -> "RuleTable":
        grouped = defaultdict(set)
        for rule in rules:
            grouped[rule.top_label].add(rule)
        return cls(grouped)

    def rules_for_top_label(self, label: str) -> FrozenSet[Rule]:
        return self._rules.get(label, self._EMPTY)

    def top_labels(self) -> FrozenSet[str]:
        return frozenset(self._rules)

    def __len__(self):
        return self._size

    def __iter__(self) -> Iterator[Rule]:
        for rules in self._rules.values():
            yield from rules

    def __contains__(self, rule):
        return isinstance(rule, Rule) and rule in self.rules_for_top_label(rule.top_label)

    def __repr__(self):
        return f"<RuleTable rules={self._size} top_labels={len(self._rules)}>"

    def summary(self) -> Dict[str, int]:
        origins = Counter(rule.origin for rule in self)
        kinds = Counter(rule.kind for rule in self)
        return {
            "rules": self._size,
            "top_labels": len(self._rules),
            "icann": origins[Origin.ICANN],
            "private": origins[Origin.PRIVATE_ENTITY],
            "plain": kinds[RuleKind.PLAIN],
            "wildcard": kinds[RuleKind.WILDCARD],
            "exception": kinds[RuleKind.EXCEPTION],
        }


def load(raw_rule_lines: Iterable[str]) -> RuleTable:
    """
    Build a RuleTable from the lines of a public_suffix_list.dat.

    Section markers decide the origin of the rules that follow them. Any rule
    that cannot be parsed aborts the whole load with MalformedRuleError; no
    partial table is ever returned.
    """
    grouped = defaultdict(set)
    section = None

    for line_no, raw in enumerate(raw_rule_lines, 1):
        line = raw.strip()
        if not line:
            continue

        if line.startswith("//"):
            marker = _SECTION_MARKERS.get(line)
            if marker is None:
                continue
            action, marked = marker
            if action == _BEGIN:
                if section is not None:
                    raise MalformedRuleError(
                        f"{marked.value} section opened inside {section.value} section", line_no, line
                    )
                section = marked
            else:
                if section is not marked:
                    raise MalformedRuleError(f"{marked.value} section closed but not open", line_no, line)
                section = None
            continue

        if section is None:
            raise MalformedRuleError("rule outside of ICANN/PRIVATE sections", line_no, line)

        # only the first whitespace-delimited token is the rule
        token = line.split()[0]
        try:
            rule = parse_rule(token, section)
        except MalformedRuleError as e:
            raise MalformedRuleError(str(e), line_no, line) from None
        grouped[rule.top_label].add(rule)

    if section is not None:
        raise MalformedRuleError(f"unterminated {section.value} section")

    table = RuleTable(grouped)
    logger.debug("Loaded %s", table)
    return table


def load_file(path: str) -> RuleTable:
    if not os.path.exists(path):
        raise SystemExit(f"❌ Public suffix list not found at {path}")
    with open(path, "r", encoding="utf-8") as f:
        return load(f)


def load_snapshot() -> RuleTable:
    data = pkgutil.get_data(SNAPSHOT_PACKAGE, SNAPSHOT_RESOURCE)
    if data is None:
        raise SystemExit(f"❌ {SNAPSHOT_PACKAGE} does not provide {SNAPSHOT_RESOURCE}")
    return load(data.decode("utf-8").splitlines())


def load_default(path: str | None = None) -> RuleTable:
    path = path or PSL_PATH
    if path:
        return load_file(path)
    return load_snapshot()
