"""Gene set / gene bipartite networks built from enrichment results."""
