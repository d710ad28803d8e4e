"""Loaders for gene set membership: enrichment result tables and GMT libraries."""

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

# Enrichr / gseapy result table column names
DEFAULT_TERM_COLUMN = "Term"
DEFAULT_GENES_COLUMN = "Genes"
DEFAULT_PADJ_COLUMN = "Adjusted P-value"


def _split_genes(genes: str, separator: str) -> list[str]:
    """Split a gene list cell, dropping blanks and repeated genes (order preserved)."""
    seen: dict[str, None] = {}
    for gene in str(genes).split(separator):
        gene = gene.strip()
        if gene:
            seen.setdefault(gene, None)
    return list(seen)


def load_enrichment_results(  # noqa: PLR0913
    path: Path,
    term_column: str = DEFAULT_TERM_COLUMN,
    genes_column: str = DEFAULT_GENES_COLUMN,
    padj_column: str | None = DEFAULT_PADJ_COLUMN,
    padj_cutoff: float | None = None,
    max_terms: int | None = None,
    gene_separator: str = ";",
) -> dict[str, list[str]]:
    """Load an enrichment result table into a gene set -> genes mapping.

    Args:
        path: TSV (``.tsv``/``.txt``) or CSV file with one enriched term per row
        term_column: Column holding the gene set name
        genes_column: Column holding the separator-joined genes driving the term
        padj_column: Adjusted p-value column, used for filtering and ordering.
            Ignored when None or absent and no cutoff is requested.
        padj_cutoff: Keep only terms with adjusted p-value <= cutoff
        max_terms: Keep at most this many terms (most significant first)
        gene_separator: Separator inside the genes column

    Returns:
        Ordered mapping of term -> list of genes. Terms with no genes are skipped.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a required column is missing.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Enrichment results not found: {path}")

    sep = "," if path.suffix.lower() == ".csv" else "\t"
    df = pd.read_csv(path, sep=sep)
    logger.info(f"Loaded {len(df)} enrichment terms from {path}")

    required = [term_column, genes_column]
    if padj_cutoff is not None and padj_column is not None:
        required.append(padj_column)
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing column(s) {missing} in {path}; found {list(df.columns)}")

    has_padj = padj_column is not None and padj_column in df.columns
    if padj_cutoff is not None and padj_column is None:
        logger.warning(
            f"padj_cutoff={padj_cutoff} ignored for {path.name}: no adjusted p-value column set"
        )
    elif padj_cutoff is not None:
        df = df[df[padj_column] <= padj_cutoff]
        logger.info(f"Terms after filtering ({padj_column} <= {padj_cutoff}): {len(df)}")

    if has_padj:
        df = df.sort_values(padj_column, kind="mergesort")
    if max_terms is not None:
        df = df.head(max_terms)

    memberships: dict[str, list[str]] = {}
    for term, genes in zip(df[term_column], df[genes_column], strict=True):
        if pd.isna(genes):
            continue
        gene_list = _split_genes(genes, gene_separator)
        if not gene_list:
            continue
        term = str(term)
        if term in memberships:
            logger.warning(f"Duplicate term '{term}' in {path.name}, merging gene lists")
            gene_list = _split_genes(
                gene_separator.join(memberships[term] + gene_list), gene_separator
            )
        memberships[term] = gene_list

    logger.info(f"Kept {len(memberships)} gene sets with at least one gene")
    return memberships


def load_gmt(path: Path) -> dict[str, list[str]]:
    """Load a GMT gene set library.

    Format: one gene set per line, ``name<TAB>description<TAB>gene1<TAB>gene2...``.

    Returns:
        Ordered mapping of gene set name -> list of genes.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"GMT file not found: {path}")

    MIN_FIELDS = 2
    memberships: dict[str, list[str]] = {}
    with open(path, encoding="utf-8") as f:
        for line in f:
            parts = line.rstrip("\n").split("\t")
            if len(parts) < MIN_FIELDS or not parts[0].strip():
                continue
            genes = _split_genes("\t".join(parts[2:]), "\t")
            if genes:
                memberships[parts[0].strip()] = genes

    logger.info(f"Loaded {len(memberships)} gene sets from {path}")
    return memberships


def load_memberships(
    path: Path,
    input_format: str | None = None,
    padj_cutoff: float | None = None,
    max_terms: int | None = None,
    **loader_kwargs,
) -> dict[str, list[str]]:
    """Load gene set memberships from an enrichment result table or a GMT library.

    Args:
        path: Enrichment result TSV/CSV or GMT file
        input_format: ``"table"`` or ``"gmt"``; inferred from the suffix when None
        padj_cutoff: Adjusted p-value cutoff (tables only; GMT has no p-values)
        max_terms: Keep at most this many gene sets
        **loader_kwargs: Column/separator overrides passed to load_enrichment_results

    Raises:
        ValueError: If input_format is not recognized.
    """
    path = Path(path)
    if input_format is None:
        input_format = "gmt" if path.suffix.lower() == ".gmt" else "table"

    if input_format == "table":
        return load_enrichment_results(
            path, padj_cutoff=padj_cutoff, max_terms=max_terms, **loader_kwargs
        )
    if input_format != "gmt":
        raise ValueError(f"Unknown input format '{input_format}'; expected 'table' or 'gmt'")

    memberships = load_gmt(path)
    if padj_cutoff is not None:
        logger.info(f"{path.name} is a GMT library without p-values; padj_cutoff not applied")
    if max_terms is not None and len(memberships) > max_terms:
        memberships = dict(list(memberships.items())[:max_terms])
        logger.info(f"Kept the first {max_terms} gene sets from {path.name}")
    return memberships
