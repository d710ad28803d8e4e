import logging
from pathlib import Path

from genesetnet.network_analysis import build_incidence_matrix, co_involvement, set_similarity
from genesetnet.network_analysis.io import read_bipartite_graph, write_matrix


def main():
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    root = Path(__file__).parents[1] / "datasets/test"
    print(f"Using data root directory: {root}")

    networks_dir = root / "01_networks"
    projections_dir = root / "02_projections"

    graph = read_bipartite_graph(
        networks_dir / "bipartite_network_nodes.csv",
        networks_dir / "bipartite_network_edges.csv",
    )
    incidence = build_incidence_matrix(graph)

    write_matrix(projections_dir / "incidence_matrix.tsv", incidence, index_label="gene_set")
    write_matrix(
        projections_dir / "geneset_similarity.tsv",
        set_similarity(incidence),
        index_label="gene_set",
    )
    write_matrix(
        projections_dir / "gene_co_involvement.tsv", co_involvement(incidence), index_label="gene"
    )
    logging.info(f"Saved projections to {projections_dir}")


if __name__ == "__main__":
    main()
