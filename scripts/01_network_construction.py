import logging
from pathlib import Path

from genesetnet.config import NetworkParams
from genesetnet.network_analysis import build_bipartite_network


def main():
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    root = Path(__file__).parents[1] / "datasets/test"
    print(f"Using data root directory: {root}")

    params = NetworkParams.from_env()
    input_dir = root / "00_input"
    networks_dir = root / "01_networks"

    enrichment_table = input_dir / "enrichment_results.tsv"
    if not enrichment_table.exists() and (input_dir / "gene_sets.gmt").exists():
        enrichment_table = input_dir / "gene_sets.gmt"

    build_bipartite_network(
        enrichment_table=enrichment_table,
        output_dir=networks_dir,
        padj_cutoff=params.padj_cutoff,
        max_terms=params.max_terms,
        min_set_size=params.min_set_size,
        **params.loader_kwargs(),
    )


if __name__ == "__main__":
    main()
