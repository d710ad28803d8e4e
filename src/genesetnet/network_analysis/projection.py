"""Projection of gene set / gene bipartite networks onto a single node class.

Given the incidence matrix M (rows = gene sets, columns = genes):

- ``set_similarity(M) = M @ M.T``: shared genes between every pair of gene sets
- ``co_involvement(M) = M.T @ M``: shared gene sets between every pair of genes

Diagonals hold node degrees. They are kept in the returned matrices and
zeroed by ``remove_self_loops`` / ``similarity_graph`` before the matrices
are used as graph adjacencies.
"""

import logging

import networkx as nx
import numpy as np
import pandas as pd
from scipy import sparse

from .errors import InputShapeError
from .incidence import build_incidence_matrix
from .network import BipartiteGraph

logger = logging.getLogger(__name__)


def _as_labeled_matrix(matrix) -> pd.DataFrame:
    """Validate a 2-D matrix and return it as a DataFrame with unique labels."""
    if isinstance(matrix, pd.DataFrame):
        df = matrix
    else:
        if sparse.issparse(matrix):
            matrix = matrix.toarray()
        arr = np.asarray(matrix)
        if arr.ndim != 2:  # noqa: PLR2004
            raise InputShapeError(f"Expected a 2-D matrix, got {arr.ndim} dimension(s)")
        df = pd.DataFrame(arr)

    if df.index.has_duplicates:
        raise InputShapeError("Matrix row labels must be unique")
    if df.columns.has_duplicates:
        raise InputShapeError("Matrix column labels must be unique")

    non_numeric = [c for c, dtype in df.dtypes.items() if not pd.api.types.is_numeric_dtype(dtype)]
    if non_numeric:
        raise InputShapeError(f"Matrix must be numeric; non-numeric column(s): {non_numeric[:5]}")
    # Boolean products would saturate shared-member counts at True
    bool_columns = [c for c, dtype in df.dtypes.items() if pd.api.types.is_bool_dtype(dtype)]
    if bool_columns:
        df = df.astype({c: np.int64 for c in bool_columns})
    return df


def _matmul(left: pd.DataFrame, right: pd.DataFrame) -> pd.DataFrame:
    """Multiply two labeled matrices, keeping left row labels and right column labels."""
    if left.shape[1] != right.shape[0]:
        raise InputShapeError(
            f"Cannot multiply {left.shape[0]}x{left.shape[1]} by "
            f"{right.shape[0]}x{right.shape[1]} matrix"
        )
    m, n = left.shape[0], right.shape[1]
    if left.shape[1] == 0 or m == 0 or n == 0:
        values = np.zeros((m, n), dtype=np.result_type(left.to_numpy(), right.to_numpy()))
    else:
        values = (sparse.csr_array(left.to_numpy()) @ sparse.csr_array(right.to_numpy())).toarray()
    return pd.DataFrame(values, index=left.index.copy(), columns=right.columns.copy())


def set_similarity(incidence) -> pd.DataFrame:
    """Gene set similarity matrix ``M @ M.T``.

    Entry (i, j) counts the genes shared by gene sets i and j; the diagonal
    holds each gene set's size.

    Raises:
        InputShapeError: If the input is not 2-D or has duplicate labels.
    """
    M = _as_labeled_matrix(incidence)
    S = _matmul(M, M.T)
    logger.debug(f"Gene set similarity matrix: {S.shape[0]}x{S.shape[1]}")
    return S


def co_involvement(incidence) -> pd.DataFrame:
    """Gene co-involvement matrix ``M.T @ M``.

    Entry (i, j) counts the gene sets containing both genes i and j; the
    diagonal holds the number of gene sets each gene belongs to.

    Raises:
        InputShapeError: If the input is not 2-D or has duplicate labels.
    """
    M = _as_labeled_matrix(incidence)
    C = _matmul(M.T, M)
    logger.debug(f"Gene co-involvement matrix: {C.shape[0]}x{C.shape[1]}")
    return C


def remove_self_loops(similarity: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of a square similarity matrix with its diagonal zeroed."""
    S = _as_labeled_matrix(similarity)
    if S.shape[0] != S.shape[1]:
        raise InputShapeError(f"Expected a square matrix, got {S.shape[0]}x{S.shape[1]}")
    values = S.to_numpy(copy=True)
    np.fill_diagonal(values, 0)
    return pd.DataFrame(values, index=S.index.copy(), columns=S.columns.copy())


def project_bipartite(graph: BipartiteGraph | nx.Graph) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Project a bipartite graph onto both node classes.

    Returns:
        Tuple of (gene set similarity, gene co-involvement) matrices, diagonals kept
    """
    M = build_incidence_matrix(graph)
    return set_similarity(M), co_involvement(M)


def similarity_graph(similarity: pd.DataFrame, min_weight: float = 1) -> nx.Graph:
    """Convert a similarity matrix into a weighted graph without self-loops.

    Every row label becomes a node (isolated ones included); off-diagonal
    entries >= min_weight become edges carrying the entry as ``weight``.
    """
    S = remove_self_loops(similarity)
    G = nx.Graph()
    G.add_nodes_from(S.index)

    values = S.to_numpy()
    rows, cols = np.nonzero(np.triu(values >= min_weight, k=1))
    labels = list(S.index)
    for i, j in zip(rows, cols, strict=True):
        weight = values[i, j]
        if weight == 0:
            continue
        G.add_edge(labels[i], labels[j], weight=weight.item())

    logger.info(
        f"Similarity graph: {G.number_of_nodes()} nodes, {G.number_of_edges()} edges "
        f"(min_weight={min_weight})"
    )
    return G
