import logging
import time
from pathlib import Path

import pandas as pd

from genesetnet.config import NetworkParams
from genesetnet.network_analysis import (
    build_bipartite_network,
    build_incidence_matrix,
    co_involvement,
    community_modularity,
    compute_centralities,
    compute_hits,
    detect_communities,
    set_similarity,
    similarity_graph,
)
from genesetnet.network_analysis.io import (
    read_bipartite_graph,
    read_matrix,
    write_matrix,
    write_table,
)

logger = logging.getLogger(__name__)

# File names shared by the pipeline steps and the step scripts
ENRICHMENT_TABLE = "enrichment_results.tsv"
GENE_SET_LIBRARY = "gene_sets.gmt"
NODES_CSV = "bipartite_network_nodes.csv"
EDGES_CSV = "bipartite_network_edges.csv"
INCIDENCE_TSV = "incidence_matrix.tsv"
SET_SIMILARITY_TSV = "geneset_similarity.tsv"
CO_INVOLVEMENT_TSV = "gene_co_involvement.tsv"


class GeneSetNetworkPipeline:
    """
    Orchestrates the gene set network pipeline.
    """

    def __init__(
        self,
        dataset_path: Path,
        params: NetworkParams | None = None,
        enrichment_table: Path | None = None,
        input_format: str | None = None,
    ) -> None:
        self.dataset_path = Path(dataset_path)
        self.params = params or NetworkParams()

        # Define directory structure
        self.dirs = {
            "input": self.dataset_path / "00_input",
            "networks": self.dataset_path / "01_networks",
            "projections": self.dataset_path / "02_projections",
            "metrics": self.dataset_path / "03_metrics",
        }
        self.enrichment_table = enrichment_table or self._default_input()
        self.input_format = input_format
        self.timings: dict[str, float] = {}

    def _default_input(self) -> Path:
        """Enrichment result table in 00_input, or a GMT library when no table exists."""
        table = self.dirs["input"] / ENRICHMENT_TABLE
        library = self.dirs["input"] / GENE_SET_LIBRARY
        if not table.exists() and library.exists():
            return library
        return table

    def run(self) -> None:
        """Execute the full pipeline."""
        logger.info(f"Starting gene set network pipeline on {self.dataset_path}")
        start_time = time.perf_counter()

        self._step_1_network_construction()
        self._step_2_projection()
        self._step_3_network_metrics()

        total_elapsed = time.perf_counter() - start_time
        logger.info(f"Pipeline completed in {total_elapsed:.2f} seconds")
        self._log_timings()

    def _log_timings(self) -> None:
        """Log table of computation times."""
        lines = ["=" * 40, f"{'Step':<25} | {'Time (ms)':<10}", "-" * 40]
        total_comp = 0.0
        for step, duration in self.timings.items():
            lines.append(f"{step:<25} | {duration * 1000:<10.4f}")
            total_comp += duration
        lines += ["-" * 40, f"{'Total Computation':<25} | {total_comp * 1000:<10.4f}", "=" * 40]
        logger.info("Computation times:\n" + "\n".join(lines))

    def _step_1_network_construction(self) -> None:
        """Build the gene set / gene bipartite network from enrichment results."""
        duration = build_bipartite_network(
            enrichment_table=self.enrichment_table,
            output_dir=self.dirs["networks"],
            padj_cutoff=self.params.padj_cutoff,
            max_terms=self.params.max_terms,
            min_set_size=self.params.min_set_size,
            input_format=self.input_format,
            **self.params.loader_kwargs(),
        )
        self.timings["Network Construction"] = duration

    def _step_2_projection(self) -> None:
        """Build the incidence matrix and project it onto both node classes."""
        graph = read_bipartite_graph(
            self.dirs["networks"] / NODES_CSV,
            self.dirs["networks"] / EDGES_CSV,
        )

        start_time = time.perf_counter()
        incidence = build_incidence_matrix(graph)
        geneset_similarity = set_similarity(incidence)
        gene_co_involvement = co_involvement(incidence)
        self.timings["Projection"] = time.perf_counter() - start_time

        out = self.dirs["projections"]
        write_matrix(out / INCIDENCE_TSV, incidence, index_label="gene_set")
        write_matrix(out / SET_SIMILARITY_TSV, geneset_similarity, index_label="gene_set")
        write_matrix(out / CO_INVOLVEMENT_TSV, gene_co_involvement, index_label="gene")
        logger.info(
            f"Projections written to {out}: {geneset_similarity.shape[0]} gene sets, "
            f"{gene_co_involvement.shape[0]} genes"
        )

    def _step_3_network_metrics(self) -> None:
        """Compute HITS, centralities and communities."""
        graph = read_bipartite_graph(
            self.dirs["networks"] / NODES_CSV,
            self.dirs["networks"] / EDGES_CSV,
        )
        projections = {
            "geneset": read_matrix(self.dirs["projections"] / SET_SIMILARITY_TSV),
            "gene": read_matrix(self.dirs["projections"] / CO_INVOLVEMENT_TSV),
        }

        start_time = time.perf_counter()
        hits = compute_hits(graph)
        results: dict[str, tuple[pd.DataFrame, pd.DataFrame, float]] = {}
        for mode, matrix in projections.items():
            G = similarity_graph(matrix, min_weight=self.params.min_similarity)
            centralities = compute_centralities(G)
            communities = detect_communities(
                G, resolution=self.params.resolution, seed=self.params.seed
            )
            results[mode] = (centralities, communities, community_modularity(G, communities))
        self.timings["Network Metrics"] = time.perf_counter() - start_time

        out = self.dirs["metrics"]
        write_table(out / "bipartite_hits.tsv", hits)
        for mode, (centralities, communities, modularity) in results.items():
            write_table(out / f"{mode}_centralities.tsv", centralities)
            write_table(out / f"{mode}_communities.tsv", communities)
            logger.info(
                f"{mode}: {communities['community'].nunique()} communities, "
                f"modularity={modularity:.4f}"
            )
        logger.info(f"Network metrics written to {out}")
