"""Exceptions raised by network construction and projection."""


class GeneSetNetError(ValueError):
    """Base class for invalid network or matrix input."""


class MalformedGraphError(GeneSetNetError):
    """The input graph violates the bipartite constraint.

    Raised for edges between two nodes of the same class, nodes with a missing
    or unknown class, edges referencing unknown nodes, and node ids shared by
    both classes.
    """


class InputShapeError(GeneSetNetError):
    """Matrix dimensions or labels prevent the requested operation."""
