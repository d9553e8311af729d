from __future__ import annotations

import pytest

from pslcheck.domain_utils import load_domain_list, normalize_domain, split_labels
from pslcheck.errors import InvalidDomainError


@pytest.mark.parametrize(
    "inp,expected",
    [
        ("example.com", ["example", "com"]),
        ("Example.COM.", ["example", "com"]),
        ("com", ["com"]),
        (" a.b.c ", ["a", "b", "c"]),
    ],
)
def test_split_labels(inp, expected):
    assert split_labels(inp) == expected


@pytest.mark.parametrize("inp", [None, "", ".", "a..b", "example.com..", ".example.com"])
def test_split_labels_invalid(inp):
    with pytest.raises(InvalidDomainError) as exc:
        split_labels(inp)
    assert exc.value.domain == inp


def test_normalize_strips_single_trailing_dot():
    assert normalize_domain("example.com.") == "example.com"
    assert normalize_domain("example.com..") == "example.com."


def test_load_domain_list(tmp_path):
    path = tmp_path / "domains.txt"
    path.write_text("# header\nexample.com\n\n  foo.co.uk  \n", encoding="utf-8")
    assert load_domain_list(str(path)) == ["example.com", "foo.co.uk"]
    assert load_domain_list(None) == []


def test_load_domain_list_missing(tmp_path):
    with pytest.raises(SystemExit):
        load_domain_list(str(tmp_path / "nope.txt"))
