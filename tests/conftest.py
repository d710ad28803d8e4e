"""
Shared fixtures: small gene set / gene networks with known projections.
"""

import networkx as nx
import pytest

from genesetnet.network_analysis import BipartiteGraph, build_bipartite_graph


@pytest.fixture
def two_set_graph() -> BipartiteGraph:
    """GeneSets {A, B}, Features {x, y, z}; edges A-x, A-y, B-y, B-z."""
    return build_bipartite_graph({"A": ["x", "y"], "B": ["y", "z"]})


@pytest.fixture
def immune_memberships() -> dict[str, list[str]]:
    return {
        "T cell activation": ["CD3E", "CD28", "LCK", "ZAP70", "IL2"],
        "TCR signaling": ["CD3E", "LCK", "ZAP70", "CD247"],
        "cytokine signaling": ["IL2", "IL2RA", "STAT5A", "JAK1"],
        "IL-2 signaling": ["IL2", "IL2RA", "STAT5A"],
        "apoptosis": ["BCL2", "BAX", "CASP3"],
    }


@pytest.fixture
def immune_graph(immune_memberships) -> BipartiteGraph:
    return build_bipartite_graph(immune_memberships)


@pytest.fixture
def labeled_nx_graph() -> nx.Graph:
    """The two-set example expressed as a networkx graph with string classes."""
    G = nx.Graph()
    G.add_nodes_from(["A", "B"], node_class="GeneSet")
    G.add_nodes_from(["x", "y", "z"], node_class="Feature")
    G.add_edges_from([("A", "x"), ("A", "y"), ("B", "y"), ("B", "z")])
    return G


@pytest.fixture
def enrichment_tsv(tmp_path):
    path = tmp_path / "enrichment_results.tsv"
    path.write_text(
        "Term\tOverlap\tP-value\tAdjusted P-value\tGenes\n"
        "set_b\t2/50\t0.002\t0.02\tG2;G3\n"
        "set_a\t3/40\t0.0001\t0.001\tG1;G2; G3\n"
        "set_c\t2/80\t0.03\t0.2\tG4;G5\n"
        "set_d\t0/10\t0.04\t0.04\t\n"
        "set_e\t2/60\t0.004\t0.03\tG3;G3;G6\n"
    )
    return path
