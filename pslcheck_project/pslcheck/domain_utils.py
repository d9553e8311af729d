# pslcheck/domain_utils.py
import os
from typing import List

from pslcheck.errors import InvalidDomainError


def normalize_domain(domain: str) -> str:
    if domain is None:
        raise InvalidDomainError(domain, "no domain given")
    d = str(domain).strip().lower()
    if d.endswith("."):
        d = d[:-1]  # a single trailing dot marks an absolute name
    if not d:
        raise InvalidDomainError(domain, "empty domain")
    return d


def split_labels(domain: str) -> List[str]:
    """Lowercased labels of ``domain``, top-level label last."""
    d = normalize_domain(domain)
    labels = d.split(".")
    if "" in labels:
        raise InvalidDomainError(domain, "empty label")
    return labels


def load_domain_list(path: str | None):
    if not path:
        return []
    if not os.path.exists(path):
        raise SystemExit(f"❌ Domain list not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return [ln.strip() for ln in f if ln.strip() and not ln.strip().startswith("#")]
