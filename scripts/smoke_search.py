#!/usr/bin/env python3
"""
Smoke test against the live documentation sites.

Run:
  python scripts/smoke_search.py

Options:
  --sources          Limit to these sources (default: all)
  --fetch            Also fetch the top result of every query
  --print-results    Print result titles
"""

import argparse
import asyncio
import sys

from docscout.core.errors import RetrievalError
from docscout.core.markdown import extract_frontmatter, strip_frontmatter
from docscout.core.services.coordinator_service import RetrievalCoordinator
from docscout.infrastructure.cache import InMemoryContentCache
from docscout.infrastructure.http import DocsHttpClient
from docscout.infrastructure.retrievers import AppleDocsRetriever, HackingWithSwiftRetriever

TESTS = [
    {
        "q": "Array",
        "source": "apple-docs",
        "expect_any": ["Array"],
    },
    {
        "q": "NavigationStack",
        "source": "apple-docs",
        "expect_any": ["NavigationStack"],
    },
    {
        "q": "async await",
        "source": "hackingwithswift",
        "expect_any": ["async", "await"],
    },
    {
        "q": "closures",
        "source": "hackingwithswift",
        "expect_any": ["closure"],
    },
]


def normalize(text: str) -> str:
    return (text or "").lower()


def check_expectations(titles: list[str], test: dict) -> list[str]:
    errors = []
    joined = normalize(" ".join(titles))

    expect_any = test.get("expect_any") or []
    if expect_any and not any(normalize(x) in joined for x in expect_any):
        errors.append(f"missing any of: {expect_any}")

    return errors


async def run(args) -> int:
    http = DocsHttpClient(timeout=args.timeout)
    cache = InMemoryContentCache()
    coordinator = RetrievalCoordinator(
        [AppleDocsRetriever(http, cache), HackingWithSwiftRetriever(http, cache)]
    )

    failures = 0
    try:
        for idx, test in enumerate(TESTS, start=1):
            if args.sources and test["source"] not in args.sources:
                continue

            print(f"\nQ{idx}: {test['q']} [{test['source']}]")
            try:
                results, _ = await coordinator.search(test["q"], [test["source"]], 10)
            except RetrievalError as e:
                failures += 1
                print("FAIL:", e)
                continue

            if args.print_results:
                for r in results:
                    print(f"  - {r.title} ({r.url})")

            errors = check_expectations([r.title for r in results], test)

            if args.fetch and results:
                try:
                    document = await coordinator.fetch(results[0])
                except RetrievalError as e:
                    errors.append(f"fetch failed: {e}")
                else:
                    if "title" not in extract_frontmatter(document.markdown):
                        errors.append("front-matter missing")
                    if not strip_frontmatter(document.markdown):
                        errors.append("empty document body")

            if errors:
                failures += 1
                print("FAIL:", "; ".join(errors))
            else:
                print(f"OK ({len(results)} results)")
    finally:
        await http.aclose()

    if failures:
        print(f"\nFAILED: {failures} test(s) failed")
        return 1
    print("\nALL OK")
    return 0


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--sources", nargs="+")
    parser.add_argument("--timeout", type=float, default=15)
    parser.add_argument("--fetch", action="store_true")
    parser.add_argument("--print-results", action="store_true")
    args = parser.parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
