"""Functions for building gene set / gene bipartite networks.

Gene sets (e.g. enriched GO terms) become ``GeneSet`` nodes, the genes
driving each term become ``Feature`` nodes, and every membership becomes
an undirected GeneSet-Feature edge.
"""

import logging
import time
from collections.abc import Mapping, Sequence
from pathlib import Path

from tqdm import tqdm

from genesetnet.preprocessing import load_memberships

from .errors import MalformedGraphError
from .io import write_edges, write_nodes
from .network import BipartiteGraph, NetworkEdge, NetworkNode, NodeClass

logger = logging.getLogger(__name__)


def build_bipartite_graph(
    memberships: Mapping[str, Sequence[str]],
    min_set_size: int = 1,
) -> BipartiteGraph:
    """Build a bipartite graph from a gene set -> genes mapping.

    Gene set nodes come first in mapping order, followed by feature nodes in
    order of first appearance.

    Args:
        memberships: Gene set id -> member gene ids
        min_set_size: Drop gene sets with fewer distinct genes than this

    Returns:
        BipartiteGraph with one edge per (gene set, gene) membership

    Raises:
        MalformedGraphError: If an id is used both as a gene set and as a gene.
    """
    kept = {}
    for geneset_id, genes in memberships.items():
        unique_genes = list(dict.fromkeys(genes))
        if len(unique_genes) >= min_set_size:
            kept[geneset_id] = unique_genes
    filtered_count = len(memberships) - len(kept)

    nodes: list[NetworkNode] = [
        NetworkNode(node_id=gs, node_class=NodeClass.GENESET, label=gs) for gs in kept
    ]
    edges: list[NetworkEdge] = []
    features_seen: dict[str, None] = {}

    for geneset_id, genes in tqdm(kept.items(), desc="Gene sets", unit="set", disable=None):
        for gene in genes:
            if gene in kept:
                raise MalformedGraphError(
                    f"Id '{gene}' is used both as a gene set and as a gene "
                    f"(member of '{geneset_id}')"
                )
            features_seen.setdefault(gene, None)
            edges.append(NetworkEdge(source=geneset_id, target=gene))

    nodes.extend(
        NetworkNode(node_id=gene, node_class=NodeClass.FEATURE, label=gene)
        for gene in features_seen
    )

    if filtered_count:
        logger.info(f"Filtered out {filtered_count} gene sets with fewer than {min_set_size} genes")
    logger.info(
        f"Bipartite graph: {len(kept)} gene sets, {len(features_seen)} genes, {len(edges)} edges"
    )
    return BipartiteGraph(nodes=nodes, edges=edges)


def build_bipartite_network(  # noqa: PLR0913
    enrichment_table: Path,
    output_dir: Path,
    padj_cutoff: float | None = 0.05,
    max_terms: int | None = None,
    min_set_size: int = 1,
    input_format: str | None = None,
    **loader_kwargs,
) -> float:
    """Build the gene set / gene network from enrichment results or a GMT library.

    Args:
        enrichment_table: Enrichment result TSV/CSV (term, genes, adjusted p-value)
            or GMT gene set library
        output_dir: Output directory for nodes and edges CSV files
        padj_cutoff: Adjusted p-value cutoff for terms
        max_terms: Maximum number of terms to keep
        min_set_size: Minimum gene set size
        input_format: "table" or "gmt"; inferred from the file suffix when None
        **loader_kwargs: Column/separator overrides passed to load_enrichment_results

    Returns:
        Computation time in seconds (excluding I/O)
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    memberships = load_memberships(
        enrichment_table,
        input_format=input_format,
        padj_cutoff=padj_cutoff,
        max_terms=max_terms,
        **loader_kwargs,
    )

    start_time = time.perf_counter()
    graph = build_bipartite_graph(memberships, min_set_size=min_set_size)
    end_time = time.perf_counter()

    nodes_csv = output_dir / "bipartite_network_nodes.csv"
    edges_csv = output_dir / "bipartite_network_edges.csv"

    write_nodes(nodes_csv, graph.nodes)
    write_edges(edges_csv, graph.edges)

    logger.info(
        f"Bipartite network built with {graph.num_nodes} nodes and {graph.num_edges} edges. "
        f"Nodes written to {nodes_csv}, edges to {edges_csv}."
    )
    return end_time - start_time
