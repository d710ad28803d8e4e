"""Pipeline parameters, with defaults overridable from the environment (or a .env file)."""

import logging
import os
from dataclasses import dataclass, fields, replace

import dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "GENESETNET_"


@dataclass(frozen=True)
class NetworkParams:
    """Parameters for gene set network construction and analysis.

    Attributes:
        padj_cutoff: Keep enrichment terms with adjusted p-value <= cutoff.
            None disables filtering.
        max_terms: Keep at most this many terms (most significant first).
        min_set_size: Drop gene sets with fewer genes.
        min_similarity: Minimum shared-member count for a projected edge.
        resolution: Louvain resolution.
        seed: Random seed for Louvain.
        term_column: Term column in the enrichment table.
        genes_column: Gene list column in the enrichment table.
        padj_column: Adjusted p-value column in the enrichment table.
        gene_separator: Separator inside the gene list column.
    """

    padj_cutoff: float | None = 0.05
    max_terms: int | None = None
    min_set_size: int = 1
    min_similarity: int = 1
    resolution: float = 1.0
    seed: int | None = 42
    term_column: str = "Term"
    genes_column: str = "Genes"
    padj_column: str = "Adjusted P-value"
    gene_separator: str = ";"

    @classmethod
    def from_env(cls, load_dotenv: bool = True) -> "NetworkParams":
        """Build parameters from ``GENESETNET_<FIELD>`` environment variables.

        Empty values or ``none`` map to None for optional fields.
        """
        if load_dotenv:
            dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))

        overrides = {}
        defaults = cls()
        for f in fields(cls):
            raw = os.getenv(f"{ENV_PREFIX}{f.name.upper()}")
            if raw is None:
                continue
            overrides[f.name] = _coerce(f.name, raw, getattr(defaults, f.name))
            logger.debug(f"Config override from environment: {f.name}={overrides[f.name]!r}")
        return replace(defaults, **overrides)

    def loader_kwargs(self) -> dict[str, str]:
        """Column/separator settings for load_enrichment_results."""
        return {
            "term_column": self.term_column,
            "genes_column": self.genes_column,
            "padj_column": self.padj_column,
            "gene_separator": self.gene_separator,
        }


_OPTIONAL_FIELDS = {"padj_cutoff": float, "max_terms": int, "seed": int}


def _coerce(name: str, raw: str, default):
    if isinstance(default, str):
        return raw
    if name in _OPTIONAL_FIELDS and raw.strip().lower() in ("", "none"):
        return None
    convert = _OPTIONAL_FIELDS.get(name, type(default))
    try:
        return convert(raw)
    except ValueError as e:
        raise ValueError(f"Invalid value for {ENV_PREFIX}{name.upper()}: {raw!r}") from e
