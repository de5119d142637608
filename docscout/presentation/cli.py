import argparse
import asyncio
import logging
import sys
from typing import Optional
from urllib.parse import urlparse

from docscout.config.settings import settings
from docscout.container import configure_container, container
from docscout.core.errors import RetrievalError
from docscout.core.markdown import render_callouts
from docscout.core.models.document import SearchOutcome, SearchResult
from docscout.core.models.source import Source
from docscout.core.services.search_service import SearchService
from docscout.infrastructure.http import DocsHttpClient

logger = logging.getLogger(__name__)

SOURCE_HOSTS = {
    "developer.apple.com": Source.APPLE_DOCS,
    "www.hackingwithswift.com": Source.HACKING_WITH_SWIFT,
    "hackingwithswift.com": Source.HACKING_WITH_SWIFT,
}


def source_for_url(url: str) -> Optional[Source]:
    return SOURCE_HOSTS.get(urlparse(url).netloc.lower())


def print_outcome(outcome: SearchOutcome) -> None:
    for index, result in enumerate(outcome.results, 1):
        kind = f" [{result.result_type}]" if result.result_type else ""
        print(f"{index:2}. {result.title}{kind} ({result.source.display_name})")
        print(f"    {result.url}")
        if result.breadcrumb_path:
            print(f"    {result.breadcrumb_path}")
        if result.summary:
            print(f"    {result.summary}")

    for source, error in outcome.errors.items():
        name = source.display_name if isinstance(source, Source) else source
        print(f"! {name}: {error}", file=sys.stderr)

    if outcome.reranked:
        logger.info("Results reranked")


async def cmd_search(service: SearchService, args: argparse.Namespace) -> int:
    """Search command - list merged results."""
    outcome = await service.search(args.query, args.sources, rerank=not args.no_rerank)
    if outcome is None:
        return 1
    if args.limit:
        outcome.results = outcome.results[:args.limit]
    print_outcome(outcome)
    return 0


async def cmd_fetch(service: SearchService, args: argparse.Namespace) -> int:
    """Fetch command - print one document as markdown."""
    source = Source.parse(args.source) if args.source else source_for_url(args.url)
    if source is None:
        print(f"Cannot tell the source of {args.url}, pass --source", file=sys.stderr)
        return 2

    result = SearchResult(title=args.url, url=args.url, source=source)
    document = await service.fetch(result)
    print(render_callouts(document.markdown) if args.plain else document.markdown)
    return 0


async def cmd_ask(service: SearchService, args: argparse.Namespace) -> int:
    """Ask command - search, rerank and print the best document."""
    document = await service.ask(args.query, args.sources)
    if document is None:
        print("No results", file=sys.stderr)
        return 1
    print(render_callouts(document.markdown) if args.plain else document.markdown)
    return 0


COMMANDS = {
    "search": cmd_search,
    "fetch": cmd_fetch,
    "ask": cmd_ask,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docscout", description="Live Swift documentation search")
    parser.add_argument("--log-level", default=settings.log_level)
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="search all enabled sources")
    search.add_argument("query")
    search.add_argument("--sources", nargs="+", metavar="SOURCE")
    search.add_argument("--limit", type=int, default=0)
    search.add_argument("--no-rerank", action="store_true")

    fetch = commands.add_parser("fetch", help="fetch one documentation page")
    fetch.add_argument("url")
    fetch.add_argument("--source")
    fetch.add_argument("--plain", action="store_true", help="flatten callouts")

    ask = commands.add_parser("ask", help="search and print the best match")
    ask.add_argument("query")
    ask.add_argument("--sources", nargs="+", metavar="SOURCE")
    ask.add_argument("--plain", action="store_true", help="flatten callouts")

    return parser


async def run(args: argparse.Namespace) -> int:
    configure_container(settings)
    service = container.resolve(SearchService)
    try:
        return await COMMANDS[args.command](service, args)
    except (RetrievalError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    finally:
        await container.resolve(DocsHttpClient).aclose()


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
