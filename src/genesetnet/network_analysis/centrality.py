"""Node-level metrics for bipartite and projected gene networks."""

import logging

import networkx as nx
import numpy as np
import pandas as pd

from .incidence import build_incidence_matrix
from .network import BipartiteGraph, NodeClass

logger = logging.getLogger(__name__)

HITS_COLUMNS = ["node_id", "node_class", "hub", "authority", "degree"]
CENTRALITY_COLUMNS = [
    "node_id",
    "degree",
    "strength",
    "degree_centrality",
    "betweenness",
    "closeness",
    "eigenvector",
]


def _hits_by_component(
    D: nx.DiGraph, M: pd.DataFrame, max_iter: int, tol: float
) -> tuple[dict, dict]:
    """HITS computed per weakly connected component.

    Components with tied leading singular values make the global solution
    degenerate, so each component is solved separately and its normalized
    scores are weighted by the component's leading singular value. Both
    score columns still sum to 1. Isolated nodes score 0.
    """
    hubs = {n: 0.0 for n in D}
    authorities = {n: 0.0 for n in D}
    solved = []
    for component in nx.weakly_connected_components(D):
        if len(component) < 2:  # noqa: PLR2004
            continue
        sub_hubs, sub_authorities = nx.hits(
            D.subgraph(component), max_iter=max_iter, tol=tol, normalized=True
        )
        block = M.loc[M.index.isin(component), M.columns.isin(component)].to_numpy()
        sigma = float(np.linalg.norm(block, ord=2))
        solved.append((sigma, sub_hubs, sub_authorities))

    total = sum(sigma for sigma, _, _ in solved)
    for sigma, sub_hubs, sub_authorities in solved:
        for node in sub_hubs:
            hubs[node] += sigma / total * abs(float(sub_hubs[node]))
            authorities[node] += sigma / total * abs(float(sub_authorities[node]))
    return hubs, authorities


def compute_hits(
    graph: BipartiteGraph | nx.Graph,
    max_iter: int = 1000,
    tol: float = 1e-8,
) -> pd.DataFrame:
    """Compute HITS hub and authority scores on the bipartite network.

    Edges are oriented GeneSet -> Feature, so gene sets receive hub scores
    and genes receive authority scores (the other score is 0). Undirected
    HITS is ill-posed here: a bipartite adjacency has no unique leading
    singular vector. Each weakly connected component is solved on its own
    and weighted by its leading singular value, so each score column sums
    to 1 (all zeros for a graph without edges).

    Args:
        graph: BipartiteGraph or networkx graph with ``node_class`` attributes
        max_iter: Maximum iterations for the singular vector solver
        tol: Convergence tolerance

    Returns:
        DataFrame with columns node_id, node_class, hub, authority, degree

    Raises:
        MalformedGraphError: If the graph is not bipartite.
    """
    M = build_incidence_matrix(graph)
    if M.shape == (0, 0):
        return pd.DataFrame(columns=HITS_COLUMNS)

    D = nx.DiGraph()
    D.add_nodes_from(M.index)
    D.add_nodes_from(M.columns)
    rows, cols = np.nonzero(M.to_numpy())
    D.add_edges_from((M.index[i], M.columns[j]) for i, j in zip(rows, cols, strict=True))

    logger.info(f"Running HITS on bipartite network ({D.number_of_edges()} edges)...")
    hubs, authorities = _hits_by_component(D, M, max_iter=max_iter, tol=tol)

    degrees = {**M.sum(axis=1).to_dict(), **M.sum(axis=0).to_dict()}
    records = [
        {
            "node_id": node,
            "node_class": node_class.value,
            "hub": hubs[node],
            "authority": authorities[node],
            "degree": int(degrees[node]),
        }
        for labels, node_class in ((M.index, NodeClass.GENESET), (M.columns, NodeClass.FEATURE))
        for node in labels
    ]
    return pd.DataFrame(records, columns=HITS_COLUMNS)


def _eigenvector_by_component(G: nx.Graph, max_iter: int = 1000) -> dict:
    """Eigenvector centrality computed per connected component.

    Disconnected graphs have no unique leading eigenvector, so each
    component with at least one edge is solved separately. Isolated nodes score 0.
    """
    scores = {n: 0.0 for n in G}
    for component in nx.connected_components(G):
        if len(component) < 2:  # noqa: PLR2004
            continue
        sub = G.subgraph(component)
        scores.update(nx.eigenvector_centrality(sub, max_iter=max_iter, weight="weight"))
    return scores


def compute_centralities(G: nx.Graph) -> pd.DataFrame:
    """Compute centralities of a projected similarity graph.

    Betweenness and closeness treat edges as unweighted hops; strength and
    eigenvector centrality use the ``weight`` (shared-member count) attribute.

    Returns:
        DataFrame with columns node_id, degree, strength, degree_centrality,
        betweenness, closeness, eigenvector
    """
    if G.number_of_nodes() == 0:
        return pd.DataFrame(columns=CENTRALITY_COLUMNS)

    # Self-loops inflate degree and break the projection semantics
    if nx.number_of_selfloops(G):
        G = G.copy()
        G.remove_edges_from(list(nx.selfloop_edges(G)))

    logger.info(
        f"Computing centralities for {G.number_of_nodes()} nodes, {G.number_of_edges()} edges"
    )
    # networkx scores a single-node graph as 1
    if G.number_of_edges():
        degree_centrality = nx.degree_centrality(G)
    else:
        degree_centrality = {n: 0.0 for n in G}
    betweenness = nx.betweenness_centrality(G)
    closeness = nx.closeness_centrality(G)
    eigenvector = _eigenvector_by_component(G)
    strength = dict(G.degree(weight="weight"))

    rows = [
        {
            "node_id": node,
            "degree": G.degree(node),
            "strength": float(strength[node]),
            "degree_centrality": float(degree_centrality[node]),
            "betweenness": float(betweenness[node]),
            "closeness": float(closeness[node]),
            "eigenvector": float(eigenvector[node]),
        }
        for node in G
    ]
    return pd.DataFrame(rows, columns=CENTRALITY_COLUMNS)
