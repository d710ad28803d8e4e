import logging

import networkx as nx
import pandas as pd

logger = logging.getLogger(__name__)


def detect_communities(
    G: nx.Graph,
    resolution: float = 1.0,
    seed: int | None = None,
) -> pd.DataFrame:
    """
    Detect communities in a projected similarity graph using the Louvain algorithm.

    Gene sets (or genes) within the same community share more members with
    each other than with nodes in other communities.

    Parameters
    ----------
    G : nx.Graph
        Weighted similarity graph, e.g. from ``similarity_graph``. The
        ``weight`` edge attribute (shared-member count) drives the modularity.
    resolution : float, optional
        Louvain resolution. Values above 1 favour smaller communities,
        values below 1 favour larger ones. Default is 1.0.
    seed : int, optional
        Random seed for reproducible community assignments.

    Returns
    -------
    pd.DataFrame
        Columns 'node_id' and 'community'. Communities are numbered from 0,
        largest first; ties are broken by the smallest member id.
    """
    if G.number_of_nodes() == 0:
        return pd.DataFrame(columns=["node_id", "community"])

    logger.info("Running Louvain community detection algorithm...")
    # Stronger connections (more shared members) are more likely
    # to be kept in the same community.
    communities = nx.community.louvain_communities(
        G, weight="weight", resolution=resolution, seed=seed
    )
    ordered = sorted(communities, key=lambda c: (-len(c), min(str(n) for n in c)))

    rows = [
        {"node_id": node, "community": community_id}
        for community_id, members in enumerate(ordered)
        for node in sorted(members, key=str)
    ]

    logger.info(f"Community detection complete. Found {len(ordered)} communities.")
    return pd.DataFrame(rows, columns=["node_id", "community"])


def community_modularity(G: nx.Graph, communities: pd.DataFrame) -> float:
    """Modularity of a community assignment produced by ``detect_communities``."""
    if G.number_of_edges() == 0:
        return 0.0
    groups = [set(group["node_id"]) for _, group in communities.groupby("community")]
    return float(nx.community.modularity(G, groups, weight="weight"))
