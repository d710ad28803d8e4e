import logging
from pathlib import Path

from genesetnet.config import NetworkParams
from genesetnet.network_analysis import (
    compute_centralities,
    compute_hits,
    detect_communities,
    similarity_graph,
)
from genesetnet.network_analysis.io import read_bipartite_graph, read_matrix, write_table


def main():
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    root = Path(__file__).parents[1] / "datasets/test"
    print(f"Using data root directory: {root}")

    params = NetworkParams.from_env()
    networks_dir = root / "01_networks"
    projections_dir = root / "02_projections"
    metrics_dir = root / "03_metrics"

    graph = read_bipartite_graph(
        networks_dir / "bipartite_network_nodes.csv",
        networks_dir / "bipartite_network_edges.csv",
    )
    write_table(metrics_dir / "bipartite_hits.tsv", compute_hits(graph))

    for mode, matrix_file in [
        ("geneset", "geneset_similarity.tsv"),
        ("gene", "gene_co_involvement.tsv"),
    ]:
        G = similarity_graph(read_matrix(projections_dir / matrix_file), params.min_similarity)
        write_table(metrics_dir / f"{mode}_centralities.tsv", compute_centralities(G))
        write_table(
            metrics_dir / f"{mode}_communities.tsv",
            detect_communities(G, resolution=params.resolution, seed=params.seed),
        )
    logging.info(f"Saved network metrics to {metrics_dir}")


if __name__ == "__main__":
    main()
