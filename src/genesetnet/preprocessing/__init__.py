"""
Preprocessing module for gene set membership data.

This module loads enrichment results and gene set libraries into
gene set -> genes mappings used to build the bipartite network.
"""

from .enrichment_results import load_enrichment_results, load_gmt, load_memberships

__all__ = [
    "load_enrichment_results",
    "load_gmt",
    "load_memberships",
]
