"""Utilities for reading and writing network data (nodes/edges/matrices) from/to disk."""

import csv
import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from .network import BipartiteGraph, NetworkEdge, NetworkNode

logger = logging.getLogger(__name__)


def read_nodes(path: Path) -> list[NetworkNode]:
    """Read node metadata from CSV."""
    nodes: list[NetworkNode] = []
    with open(path, encoding="utf-8") as f:
        r = csv.DictReader(f)
        for row in r:
            node_id = row.get("node_id")
            if not node_id:
                continue
            nodes.append(
                NetworkNode(
                    node_id=node_id,
                    node_class=row["node_class"],
                    label=row.get("label", ""),
                )
            )
    return nodes


def read_edges(path: Path) -> list[NetworkEdge]:
    """Read edges from CSV."""
    return [
        NetworkEdge(source=source, target=target, weight=weight)
        for source, target, weight in iter_edges_simple(path)
    ]


def iter_edges_simple(path: Path) -> Iterable[tuple[str, str, int]]:
    """Iterate edges as simple tuples (for memory efficiency)."""
    with open(path, encoding="utf-8") as f:
        r = csv.DictReader(f)
        for row in r:
            yield row["source"], row["target"], int(row.get("weight") or 1)


def write_nodes(path: Path, nodes: list[NetworkNode]) -> None:
    """Write nodes to CSV."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        w = csv.writer(f)
        w.writerow(["node_id", "node_class", "label"])
        for node in nodes:
            w.writerow([node.node_id, node.node_class.value, node.label])


def write_edges(path: Path, edges: list[NetworkEdge]) -> None:
    """Write edges to CSV."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        w = csv.writer(f)
        w.writerow(["source", "target", "weight"])
        for edge in edges:
            w.writerow([edge.source, edge.target, edge.weight])


def read_bipartite_graph(nodes_csv: Path, edges_csv: Path) -> BipartiteGraph:
    """Load a bipartite graph previously written with write_nodes/write_edges."""
    graph = BipartiteGraph(nodes=read_nodes(nodes_csv), edges=read_edges(edges_csv))
    logger.info(
        f"Loaded bipartite network with {graph.num_nodes} nodes and {graph.num_edges} edges "
        f"from {nodes_csv.name}/{edges_csv.name}"
    )
    return graph


def write_matrix(path: Path, matrix: pd.DataFrame, index_label: str = "node_id") -> None:
    """Write a labeled matrix as TSV, row labels in the first column."""
    path.parent.mkdir(parents=True, exist_ok=True)
    matrix.to_csv(path, sep="\t", index=True, index_label=index_label)
    logger.debug(f"Wrote {matrix.shape[0]}x{matrix.shape[1]} matrix to {path}")


def read_matrix(path: Path) -> pd.DataFrame:
    """Read a labeled matrix written by write_matrix.

    Labels are read as strings so ids such as ``0042`` survive unchanged.
    """
    raw = pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False)
    matrix = raw.set_index(raw.columns[0]).apply(pd.to_numeric)
    matrix.index = matrix.index.astype(str)
    matrix.index.name = None
    matrix.columns = matrix.columns.astype(str)
    return matrix


def write_table(path: Path, table: pd.DataFrame) -> None:
    """Write a per-node attribute table as TSV."""
    path.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(path, sep="\t", index=False)
