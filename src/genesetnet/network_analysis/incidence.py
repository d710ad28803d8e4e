"""Incidence matrix construction for gene set / gene bipartite graphs."""

import logging
from collections.abc import Iterable

import networkx as nx
import numpy as np
import pandas as pd
from scipy import sparse

from .errors import MalformedGraphError
from .network import BipartiteGraph, NodeClass

logger = logging.getLogger(__name__)


def _node_classes_from_networkx(G: nx.Graph) -> dict[str, NodeClass]:
    """Read the ``node_class`` attribute of every node, in insertion order."""
    classes: dict[str, NodeClass] = {}
    for node, data in G.nodes(data=True):
        raw = data.get("node_class")
        if raw is None:
            raise MalformedGraphError(f"Node '{node}' has no node_class attribute")
        try:
            classes[node] = NodeClass(raw)
        except ValueError as e:
            raise MalformedGraphError(f"Node '{node}' has unknown node_class {raw!r}") from e
    return classes


def _node_classes_from_bipartite(graph: BipartiteGraph) -> dict[str, NodeClass]:
    classes: dict[str, NodeClass] = {}
    for node in graph.nodes:
        previous = classes.setdefault(node.node_id, node.node_class)
        if previous is not node.node_class:
            raise MalformedGraphError(
                f"Node '{node.node_id}' is declared as both {previous.value} "
                f"and {node.node_class.value}"
            )
    return classes


def build_incidence_matrix(graph: BipartiteGraph | nx.Graph) -> pd.DataFrame:
    """Build the 0/1 incidence matrix of a bipartite graph.

    Rows are GeneSet nodes and columns are Feature nodes, both in node
    insertion order. Isolated nodes yield all-zero rows/columns and repeated
    edges collapse to a single 1.

    Args:
        graph: BipartiteGraph, or networkx graph with a ``node_class`` node attribute

    Returns:
        Integer DataFrame indexed by gene set ids with feature ids as columns

    Raises:
        MalformedGraphError: If an edge joins two nodes of the same class, references
            an unknown node, or a node has a missing/unknown class.
    """
    if isinstance(graph, BipartiteGraph):
        classes = _node_classes_from_bipartite(graph)
        edges: Iterable[tuple[str, str]] = ((e.source, e.target) for e in graph.edges)
    else:
        classes = _node_classes_from_networkx(graph)
        edges = graph.edges()

    genesets = [n for n, c in classes.items() if c is NodeClass.GENESET]
    features = [n for n, c in classes.items() if c is NodeClass.FEATURE]
    row_idx = {n: i for i, n in enumerate(genesets)}
    col_idx = {n: j for j, n in enumerate(features)}

    rows: list[int] = []
    cols: list[int] = []
    for u, v in edges:
        cu, cv = classes.get(u), classes.get(v)
        if cu is None or cv is None:
            missing = u if cu is None else v
            raise MalformedGraphError(f"Edge ({u}, {v}) references unknown node '{missing}'")
        if cu is cv:
            raise MalformedGraphError(
                f"Edge ({u}, {v}) connects two {cu.value} nodes; graph is not bipartite"
            )
        geneset, feature = (u, v) if cu is NodeClass.GENESET else (v, u)
        rows.append(row_idx[geneset])
        cols.append(col_idx[feature])

    M = sparse.coo_array(
        (
            np.ones(len(rows), dtype=np.int64),
            (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64)),
        ),
        shape=(len(genesets), len(features)),
    ).tocsr()
    # Duplicate edges are summed by the COO -> CSR conversion
    M.data = np.minimum(M.data, 1)

    logger.info(
        f"Incidence matrix: {len(genesets)} gene sets x {len(features)} features, "
        f"{M.nnz} non-zero entries"
    )
    return pd.DataFrame(M.toarray(), index=pd.Index(genesets), columns=pd.Index(features))
