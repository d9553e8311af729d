from __future__ import annotations

import pytest

from pslcheck.classifier import Classifier
from pslcheck.rules import RuleTable, load

SAMPLE_PSL = """\
// Sample list for tests, same layout as public_suffix_list.dat

// ===BEGIN ICANN DOMAINS===

// uk
uk
co.uk

com

// ck
*.ck
!www.ck

// jp
jp
*.kawasaki.jp
!city.kawasaki.jp

// ===END ICANN DOMAINS===

// ===BEGIN PRIVATE DOMAINS===

blogspot.com
*.compute.amazonaws.com
github.io
localprivate

// ===END PRIVATE DOMAINS===
"""


@pytest.fixture(scope="session")
def sample_lines() -> list[str]:
    return SAMPLE_PSL.splitlines()


@pytest.fixture(scope="session")
def table(sample_lines) -> RuleTable:
    return load(sample_lines)


@pytest.fixture(scope="session")
def classifier(table) -> Classifier:
    return Classifier(table)


@pytest.fixture
def psl_file(tmp_path):
    path = tmp_path / "public_suffix_list.dat"
    path.write_text(SAMPLE_PSL, encoding="utf-8")
    return path
