"""Tests for incidence matrix construction."""

import networkx as nx
import numpy as np
import pandas as pd
import pytest

from genesetnet.network_analysis import (
    BipartiteGraph,
    MalformedGraphError,
    NetworkEdge,
    NetworkNode,
    NodeClass,
    build_incidence_matrix,
)


class TestBuildIncidenceMatrix:
    def test_worked_example(self, two_set_graph):
        M = build_incidence_matrix(two_set_graph)
        assert list(M.index) == ["A", "B"]
        assert list(M.columns) == ["x", "y", "z"]
        np.testing.assert_array_equal(M.to_numpy(), [[1, 1, 0], [0, 1, 1]])

    def test_networkx_input_matches_bipartite_input(self, two_set_graph, labeled_nx_graph):
        pd.testing.assert_frame_equal(
            build_incidence_matrix(labeled_nx_graph),
            build_incidence_matrix(two_set_graph),
        )

    def test_rebuild_is_identical(self, immune_graph):
        first = build_incidence_matrix(immune_graph)
        second = build_incidence_matrix(immune_graph)
        pd.testing.assert_frame_equal(first, second)

    def test_edge_direction_does_not_matter(self):
        graph = BipartiteGraph(
            nodes=[
                NetworkNode("A", NodeClass.GENESET),
                NetworkNode("x", NodeClass.FEATURE),
            ],
            edges=[NetworkEdge(source="x", target="A")],
        )
        assert build_incidence_matrix(graph).loc["A", "x"] == 1

    def test_duplicate_edges_collapse_to_one(self):
        graph = BipartiteGraph(
            nodes=[NetworkNode("A", NodeClass.GENESET), NetworkNode("x", NodeClass.FEATURE)],
            edges=[NetworkEdge("A", "x"), NetworkEdge("x", "A", weight=3)],
        )
        assert build_incidence_matrix(graph).loc["A", "x"] == 1

    def test_isolated_nodes_give_zero_rows_and_columns(self):
        graph = BipartiteGraph(
            nodes=[
                NetworkNode("A", NodeClass.GENESET),
                NetworkNode("B", NodeClass.GENESET),
                NetworkNode("x", NodeClass.FEATURE),
                NetworkNode("y", NodeClass.FEATURE),
            ],
            edges=[NetworkEdge("A", "x")],
        )
        M = build_incidence_matrix(graph)
        assert M.shape == (2, 2)
        assert M.loc["B"].sum() == 0
        assert M["y"].sum() == 0

    def test_row_sums_are_geneset_sizes(self, immune_graph, immune_memberships):
        M = build_incidence_matrix(immune_graph)
        for geneset, genes in immune_memberships.items():
            assert M.loc[geneset].sum() == len(genes)

    def test_empty_graph(self):
        M = build_incidence_matrix(BipartiteGraph())
        assert M.shape == (0, 0)

    def test_no_features(self):
        M = build_incidence_matrix(BipartiteGraph(nodes=[NetworkNode("A", NodeClass.GENESET)]))
        assert M.shape == (1, 0)


class TestMalformedGraph:
    def test_same_class_edge_raises(self, two_set_graph):
        two_set_graph.edges.append(NetworkEdge("x", "y"))
        with pytest.raises(MalformedGraphError, match="two Feature nodes"):
            build_incidence_matrix(two_set_graph)

    def test_geneset_to_geneset_edge_raises_for_networkx(self, labeled_nx_graph):
        labeled_nx_graph.add_edge("A", "B")
        with pytest.raises(MalformedGraphError, match="not bipartite"):
            build_incidence_matrix(labeled_nx_graph)

    def test_missing_node_class_raises(self, labeled_nx_graph):
        labeled_nx_graph.add_node("orphan")
        with pytest.raises(MalformedGraphError, match="no node_class"):
            build_incidence_matrix(labeled_nx_graph)

    def test_unknown_node_class_raises(self):
        G = nx.Graph()
        G.add_node("A", node_class="Pathway")
        with pytest.raises(MalformedGraphError, match="unknown node_class"):
            build_incidence_matrix(G)

    def test_edge_to_unknown_node_raises(self, two_set_graph):
        two_set_graph.edges.append(NetworkEdge("A", "missing"))
        with pytest.raises(MalformedGraphError, match="unknown node 'missing'"):
            build_incidence_matrix(two_set_graph)

    def test_conflicting_node_declarations_raise(self):
        graph = BipartiteGraph(
            nodes=[NetworkNode("A", NodeClass.GENESET), NetworkNode("A", NodeClass.FEATURE)]
        )
        with pytest.raises(MalformedGraphError, match="declared as both"):
            build_incidence_matrix(graph)

    def test_malformed_graph_is_value_error(self):
        assert issubclass(MalformedGraphError, ValueError)
