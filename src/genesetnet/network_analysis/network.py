"""Domain models for gene set / gene network entities."""

from dataclasses import dataclass, field
from enum import Enum

import networkx as nx


class NodeClass(str, Enum):
    """Node class in the gene set / gene bipartite network."""

    GENESET = "GeneSet"
    FEATURE = "Feature"


@dataclass(frozen=True)
class NetworkNode:
    """Represents a node in a bipartite network. The class cannot change after creation."""

    node_id: str
    node_class: NodeClass
    label: str = ""  # Display name, e.g. the full enrichment term

    def __post_init__(self) -> None:
        # Accept the string value ("GeneSet"/"Feature") and normalize to the enum
        object.__setattr__(self, "node_class", NodeClass(self.node_class))


@dataclass
class NetworkEdge:
    """Represents an edge between two nodes."""

    source: str
    target: str
    weight: int = 1


@dataclass
class BipartiteGraph:
    """Represents a gene set / gene bipartite network."""

    nodes: list[NetworkNode] = field(default_factory=list)
    edges: list[NetworkEdge] = field(default_factory=list)

    @property
    def geneset_nodes(self) -> list[NetworkNode]:
        """Return only gene set nodes."""
        return [n for n in self.nodes if n.node_class is NodeClass.GENESET]

    @property
    def feature_nodes(self) -> list[NetworkNode]:
        """Return only feature (gene) nodes."""
        return [n for n in self.nodes if n.node_class is NodeClass.FEATURE]

    @property
    def num_nodes(self) -> int:
        """Total number of nodes."""
        return len(self.nodes)

    @property
    def num_edges(self) -> int:
        """Total number of edges."""
        return len(self.edges)

    def to_networkx(self) -> nx.Graph:
        """Convert to an undirected networkx graph with a ``node_class`` attribute per node.

        Nodes are added in insertion order, so downstream orderings are stable.
        """
        G = nx.Graph()
        for node in self.nodes:
            G.add_node(node.node_id, node_class=node.node_class, label=node.label)
        for edge in self.edges:
            G.add_edge(edge.source, edge.target, weight=edge.weight)
        return G
