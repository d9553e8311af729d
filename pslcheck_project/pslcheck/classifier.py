# pslcheck/classifier.py
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pslcheck.domain_utils import normalize_domain, split_labels
from pslcheck.rules import Origin, Rule, RuleKind, RuleTable


@dataclass(frozen=True)
class ClassificationResult:
    domain: str
    matched_suffix: str
    origin: Origin

    def to_dict(self) -> Dict[str, str]:
        return {
            "domain": self.domain,
            "publicSuffix": self.matched_suffix,
            "isManagedBy": self.origin.value,
        }


def _suffix_len(rule: Rule, labels: List[str]) -> Optional[int]:
    """Number of trailing domain labels covered by ``rule``, or None if it does not apply."""
    n = len(rule.labels)
    if n > len(labels) or tuple(labels[-n:]) != rule.labels:
        return None
    if rule.kind is RuleKind.WILDCARD:
        # the "*" needs a label of its own
        return n + 1 if len(labels) > n else None
    if rule.kind is RuleKind.EXCEPTION:
        return n - 1
    return n


def match(table: RuleTable, labels: List[str]) -> Tuple[int, Origin]:
    """
    Longest-match lookup of ``labels`` (top-level label last).

    Returns the length of the public suffix in labels and the origin of the
    prevailing rule. Exceptions beat every other rule; otherwise the longest
    rule wins and a plain rule beats a wildcard of the same length. With no
    match the implicit "*" rule applies: one label, Origin.NONE.
    """
    best = None  # (length, plain-first tiebreak, origin)
    best_exception = None

    for rule in table.rules_for_top_label(labels[-1]):
        length = _suffix_len(rule, labels)
        if length is None:
            continue
        if rule.kind is RuleKind.EXCEPTION:
            if best_exception is None or length > best_exception[0]:
                best_exception = (length, rule.origin)
            continue
        cand = (length, rule.kind is RuleKind.PLAIN, rule.origin)
        if best is None or cand[:2] > best[:2]:
            best = cand

    if best_exception is not None:
        return best_exception
    if best is not None:
        return best[0], best[2]
    return 1, Origin.NONE


def classify(table: RuleTable, domain: str) -> ClassificationResult:
    labels = split_labels(domain)
    length, origin = match(table, labels)
    return ClassificationResult(
        domain=normalize_domain(domain),
        matched_suffix=".".join(labels[-length:]),
        origin=origin,
    )


class Classifier:
    """A RuleTable bound to ``classify``; safe to share between threads."""

    __slots__ = ("table",)

    def __init__(self, table: RuleTable):
        self.table = table

    def classify(self, domain: str) -> ClassificationResult:
        return classify(self.table, domain)

    def classify_many(self, domains) -> List[ClassificationResult]:
        return [classify(self.table, d) for d in domains]

    __call__ = classify
