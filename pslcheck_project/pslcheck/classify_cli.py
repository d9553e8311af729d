# pslcheck/classify_cli.py
import argparse
import pandas as pd
from pslcheck.config import PSL_PATH
from pslcheck.classifier import Classifier
from pslcheck.domain_utils import load_domain_list
from pslcheck.errors import InvalidDomainError, MalformedRuleError
from pslcheck.rules import load_default

INVALID = "INVALID"


def classify_single(domain, classifier):
    try:
        res = classifier.classify(domain)
    except InvalidDomainError as e:
        print(f"❌ {e}")
        return False
    print(f"{res.domain}: suffix={res.matched_suffix} managed_by={res.origin.value}")
    return True


def _classify_row(domain, classifier):
    try:
        res = classifier.classify(domain)
    except InvalidDomainError:
        return "", INVALID
    return res.matched_suffix, res.origin.value


def classify_frame(df, classifier, column="domain"):
    if column not in df.columns:
        raise SystemExit(f"❌ CSV must contain a '{column}' column.")
    pairs = df[column].fillna("").astype(str).map(lambda d: _classify_row(d, classifier))
    out = df.copy()
    out["public_suffix"] = pairs.map(lambda p: p[0])
    out["is_managed_by"] = pairs.map(lambda p: p[1])
    return out


def classify_csv(path, classifier, out_path):
    out = classify_frame(pd.read_csv(path), classifier)
    if out_path:
        out.to_csv(out_path, index=False)
        print(f"💾 Saved classifications to {out_path}")
    else:
        print(out.head(10))
    return out


def classify_list(path, classifier):
    ok = True
    for domain in load_domain_list(path):
        ok = classify_single(domain, classifier) and ok
    return ok


def print_stats(table):
    for key, value in table.summary().items():
        print(f"  {key:<11}: {value}")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Classify domains against the Public Suffix List")
    ap.add_argument("domain", nargs="?")
    ap.add_argument("--csv")
    ap.add_argument("--out")
    ap.add_argument("--list")
    ap.add_argument("--psl", default=PSL_PATH, help="public_suffix_list.dat to use instead of the bundled snapshot")
    ap.add_argument("--stats", action="store_true", help="print rule table counts")
    args = ap.parse_args(argv)

    try:
        table = load_default(args.psl)
    except MalformedRuleError as e:
        raise SystemExit(f"❌ Malformed public suffix list: {e}")
    classifier = Classifier(table)

    if args.stats:
        print_stats(table)

    if args.csv:
        classify_csv(args.csv, classifier, args.out)
    elif args.list:
        if not classify_list(args.list, classifier):
            raise SystemExit(1)
    elif args.domain:
        if not classify_single(args.domain, classifier):
            raise SystemExit(1)
    elif not args.stats:
        ap.print_help()


if __name__ == "__main__":
    main()
