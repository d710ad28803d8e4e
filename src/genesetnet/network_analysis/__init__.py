from .bipartite_network import build_bipartite_graph, build_bipartite_network
from .centrality import compute_centralities, compute_hits
from .community_detection import community_modularity, detect_communities
from .errors import GeneSetNetError, InputShapeError, MalformedGraphError
from .incidence import build_incidence_matrix
from .network import BipartiteGraph, NetworkEdge, NetworkNode, NodeClass
from .projection import (
    co_involvement,
    project_bipartite,
    remove_self_loops,
    set_similarity,
    similarity_graph,
)

__all__ = [
    "BipartiteGraph",
    "GeneSetNetError",
    "InputShapeError",
    "MalformedGraphError",
    "NetworkEdge",
    "NetworkNode",
    "NodeClass",
    "build_bipartite_graph",
    "build_bipartite_network",
    "build_incidence_matrix",
    "co_involvement",
    "community_modularity",
    "compute_centralities",
    "compute_hits",
    "detect_communities",
    "project_bipartite",
    "remove_self_loops",
    "set_similarity",
    "similarity_graph",
]
