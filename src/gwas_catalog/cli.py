"""Command line driver: summarize a catalog and export position/effect-size pairs."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from dotenv import load_dotenv

from .catalog import CatalogError, GWASCatalog
from .catalog.gwas import SUMMARY_THRESHOLD
from .utils.file_handlers import write_results
from .utils.validators import CATALOG_CHROMOSOMES, validate_chromosome, validate_count

logger = logging.getLogger(__name__)


def _chromosome(value: str) -> str:
    try:
        return validate_chromosome(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _positive_int(value: str) -> int:
    try:
        return validate_count(value, "value", min_value=1)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Value must be a positive integer") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gwas-catalog",
        description="Summarize a GWAS Catalog associations file and export position/effect-size pairs.",
    )
    parser.add_argument(
        "catalog",
        nargs="?",
        default=os.getenv("GWAS_CATALOG_PATH"),
        help="GWAS Catalog associations TSV (default: $GWAS_CATALOG_PATH).",
    )
    parser.add_argument(
        "--disease",
        default="Type 2 diabetes",
        help="DISEASE/TRAIT value to subset on (exact match).",
    )
    parser.add_argument(
        "--chromosome",
        type=_chromosome,
        default="6",
        help="Chromosome to subset the disease on (1-22, X, Y).",
    )
    parser.add_argument(
        "--output",
        default="pairs.csv",
        help="CSV file receiving the (CHR_POS, OR or BETA) pairs.",
    )
    parser.add_argument(
        "--sort-by-position",
        action="store_true",
        help="Sort exported pairs by position instead of file order.",
    )
    parser.add_argument(
        "--scan",
        action="store_true",
        help="Also report pair counts for every disease and chromosome.",
    )
    parser.add_argument(
        "--min-pairs",
        type=_positive_int,
        default=1,
        help="Smallest pair count reported by --scan.",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level (default: $LOG_LEVEL or INFO).",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def format_summary(label: str, catalog: GWASCatalog) -> str:
    summary = catalog.summary()
    return (
        f"{label}: associations: {summary['associations']}"
        f"\tdiseases > {SUMMARY_THRESHOLD}: {summary['diseases_over_threshold']}"
    )


def run(args: argparse.Namespace) -> int:
    if not args.catalog:
        logger.error("No catalog given and GWAS_CATALOG_PATH is not set")
        return 2

    catalog = GWASCatalog.from_path(args.catalog)
    print(format_summary("catalog", catalog))

    by_disease = catalog.for_disease(args.disease)
    print(format_summary(args.disease, by_disease))
    print(f"Unique RSIDs for {args.disease}: {len(by_disease.unique_rsids())}")

    by_chromosome = by_disease.for_chromosome(args.chromosome)
    print(format_summary(f"{args.disease} chr{args.chromosome}", by_chromosome))

    pairs = by_chromosome.pairs_frame(sort_by_position=args.sort_by_position)
    write_results(pairs, args.output, format="csv")
    print(f"Wrote {len(pairs)} position/effect-size pairs to {args.output}")

    if args.scan:
        for disease, chromosome, n_pairs in catalog.scan_pairs(CATALOG_CHROMOSOMES, args.min_pairs):
            print(f"{disease}:{chromosome} size is {n_pairs}")

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        return run(args)
    except FileNotFoundError as exc:
        logger.error(f"File not found: {exc}")
    except CatalogError as exc:
        logger.error(f"Invalid catalog: {exc}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
