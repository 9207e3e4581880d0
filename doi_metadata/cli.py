"""Command-line access to DOI metadata and references."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, Dict

from doi_metadata.api import MetadataClient, load_config
from doi_metadata.exceptions import MetadataError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Crossref metadata and BibTeX for DOIs")
    parser.add_argument("--verbose", action="store_true", help="Log HTTP activity to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    metadata = subparsers.add_parser("metadata", help="Fetch metadata and BibTeX for a DOI")
    metadata.add_argument("doi", help="The DOI to look up (e.g., 10.1038/nature12373)")
    metadata.add_argument(
        "--no-orcid",
        action="store_true",
        help="Skip ORCID lookups for abbreviated given names",
    )
    metadata.add_argument(
        "--no-direct-bibtex",
        action="store_true",
        help="Always generate BibTeX locally instead of using the Crossref export",
    )
    metadata.add_argument(
        "--bibtex-only", action="store_true", help="Print only the BibTeX entry"
    )

    references = subparsers.add_parser("references", help="Fetch references cited by a DOI")
    references.add_argument("doi", help="The DOI whose references should be listed")

    return parser


def _client_for(args: argparse.Namespace) -> MetadataClient:
    config = load_config()
    if getattr(args, "no_orcid", False):
        config.enable_orcid_lookup = False
    if getattr(args, "no_direct_bibtex", False):
        config.enable_direct_bibtex = False
    return MetadataClient(config, debug_logging=args.verbose)


def _run_metadata(args: argparse.Namespace) -> None:
    metadata = _client_for(args).fetch_metadata(args.doi)
    if args.bibtex_only:
        print(metadata.bibtex)
        return
    print(json.dumps(metadata.to_dict(), indent=2, ensure_ascii=False))


def _run_references(args: argparse.Namespace) -> None:
    references = _client_for(args).fetch_references(args.doi)
    print(json.dumps(references.to_dict(), indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands: Dict[str, Callable[[argparse.Namespace], Any]] = {
        "metadata": _run_metadata,
        "references": _run_references,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.error("Unknown command")
        return 1

    try:
        handler(args)
    except MetadataError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
