from __future__ import annotations

import pytest
import tldextract

from pslcheck.classifier import classify
from pslcheck.rules import Origin, load_default, load_snapshot


@pytest.fixture(scope="module")
def snapshot():
    return load_snapshot()


@pytest.fixture(scope="module")
def offline_extract():
    return tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None, include_psl_private_domains=True)


def test_snapshot_has_both_sections(snapshot):
    s = snapshot.summary()
    assert s["icann"] > 1000
    assert s["private"] > 100
    assert s["exception"] > 0


def test_load_default_without_path_uses_snapshot(snapshot, monkeypatch):
    monkeypatch.setattr("pslcheck.rules.PSL_PATH", "")
    assert len(load_default()) == len(snapshot)


@pytest.mark.parametrize(
    "domain,suffix,origin",
    [
        ("www.example.co.uk", "co.uk", Origin.ICANN),
        ("foo.github.io", "github.io", Origin.PRIVATE_ENTITY),
        ("www.ck", "ck", Origin.ICANN),
        ("city.kawasaki.jp", "kawasaki.jp", Origin.ICANN),
        ("example.nosuchtld", "nosuchtld", Origin.NONE),
    ],
)
def test_snapshot_classification(snapshot, domain, suffix, origin):
    res = classify(snapshot, domain)
    assert (res.matched_suffix, res.origin) == (suffix, origin)


@pytest.mark.parametrize(
    "domain",
    ["www.example.co.uk", "sub.example.com", "foo.github.io", "a.b.kawasaki.jp", "www.city.kawasaki.jp", "x.foo.www.ck"],
)
def test_agrees_with_tldextract(snapshot, offline_extract, domain):
    ext = offline_extract(domain)
    res = classify(snapshot, domain)
    assert res.matched_suffix == ext.suffix
    assert (res.origin is Origin.PRIVATE_ENTITY) == ext.is_private
