import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from genesetnet.config import NetworkParams
from genesetnet.pipeline import GeneSetNetworkPipeline


def main():
    # Default root path
    default_root = Path(__file__).parents[1] / "datasets/test"

    parser = argparse.ArgumentParser(description="Run gene set network pipeline.")
    parser.add_argument(
        "dataset_path",
        nargs="?",
        type=Path,
        default=default_root,
        help=f"Path to the dataset root directory (default: {default_root})",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--enrichment_table",
        type=Path,
        default=None,
        help="Enrichment result table (default: <dataset_path>/00_input/enrichment_results.tsv, "
        "or 00_input/gene_sets.gmt when no table exists)",
    )
    source.add_argument(
        "--gmt",
        type=Path,
        default=None,
        help="GMT gene set library to use instead of an enrichment result table",
    )
    parser.add_argument(
        "--padj_cutoff",
        type=float,
        default=None,
        help="Adjusted p-value cutoff for enrichment terms (default: 0.05)",
    )
    parser.add_argument(
        "--max_terms",
        type=int,
        default=None,
        help="Maximum number of enrichment terms to keep (default: all)",
    )
    parser.add_argument(
        "--min_similarity",
        type=int,
        default=None,
        help="Minimum shared-member count for a projected edge (default: 1)",
    )
    parser.add_argument(
        "--resolution",
        type=float,
        default=None,
        help="Louvain resolution (default: 1.0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for Louvain (default: 42)",
    )

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger = logging.getLogger(__name__)

    # Command-line flags take precedence over GENESETNET_* environment variables
    overrides = {
        name: getattr(args, name)
        for name in ("padj_cutoff", "max_terms", "min_similarity", "resolution", "seed")
        if getattr(args, name) is not None
    }

    try:
        params = replace(NetworkParams.from_env(), **overrides)
        pipeline = GeneSetNetworkPipeline(
            dataset_path=args.dataset_path,
            params=params,
            enrichment_table=args.gmt or args.enrichment_table,
            input_format="gmt" if args.gmt else None,
        )
        pipeline.run()
    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
