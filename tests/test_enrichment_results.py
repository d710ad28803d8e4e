"""Tests for enrichment result and GMT loading."""

import logging

import pytest

from genesetnet.preprocessing import load_enrichment_results, load_gmt, load_memberships


class TestLoadEnrichmentResults:
    def test_orders_by_adjusted_pvalue(self, enrichment_tsv):
        memberships = load_enrichment_results(enrichment_tsv)
        assert list(memberships) == ["set_a", "set_b", "set_e", "set_c"]

    def test_genes_are_stripped_and_deduplicated(self, enrichment_tsv):
        memberships = load_enrichment_results(enrichment_tsv)
        assert memberships["set_a"] == ["G1", "G2", "G3"]
        assert memberships["set_e"] == ["G3", "G6"]

    def test_empty_gene_lists_are_skipped(self, enrichment_tsv):
        assert "set_d" not in load_enrichment_results(enrichment_tsv)

    def test_padj_cutoff(self, enrichment_tsv):
        memberships = load_enrichment_results(enrichment_tsv, padj_cutoff=0.025)
        assert list(memberships) == ["set_a", "set_b"]

    def test_max_terms(self, enrichment_tsv):
        memberships = load_enrichment_results(enrichment_tsv, max_terms=2)
        assert list(memberships) == ["set_a", "set_b"]

    def test_csv_with_custom_columns(self, tmp_path):
        path = tmp_path / "results.csv"
        path.write_text("pathway,leading_edge\nP1,A|B\nP2,B|C\n")
        memberships = load_enrichment_results(
            path,
            term_column="pathway",
            genes_column="leading_edge",
            padj_column=None,
            gene_separator="|",
        )
        assert memberships == {"P1": ["A", "B"], "P2": ["B", "C"]}

    def test_missing_padj_column_without_cutoff_keeps_file_order(self, tmp_path):
        path = tmp_path / "results.tsv"
        path.write_text("Term\tGenes\nT2\tA\nT1\tB\n")
        assert list(load_enrichment_results(path)) == ["T2", "T1"]

    def test_missing_column_raises(self, tmp_path):
        path = tmp_path / "results.tsv"
        path.write_text("Term\tOverlap\nT1\t1/2\n")
        with pytest.raises(ValueError, match="Missing column"):
            load_enrichment_results(path)

    def test_missing_padj_column_with_cutoff_raises(self, tmp_path):
        path = tmp_path / "results.tsv"
        path.write_text("Term\tGenes\nT1\tA\n")
        with pytest.raises(ValueError, match="Adjusted P-value"):
            load_enrichment_results(path, padj_cutoff=0.05)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_enrichment_results(tmp_path / "nope.tsv")

    def test_duplicate_terms_are_merged(self, tmp_path):
        path = tmp_path / "results.tsv"
        path.write_text("Term\tGenes\nT1\tA;B\nT1\tB;C\n")
        assert load_enrichment_results(path) == {"T1": ["A", "B", "C"]}


class TestLoadGmt:
    def test_parses_library(self, tmp_path):
        path = tmp_path / "library.gmt"
        path.write_text(
            "HALLMARK_APOPTOSIS\thttp://example.org\tBAX\tBCL2\tCASP3\n"
            "EMPTY_SET\tno genes\n"
            "HALLMARK_IL2\t\tIL2\tIL2RA\tIL2\n"
        )
        memberships = load_gmt(path)
        assert memberships == {
            "HALLMARK_APOPTOSIS": ["BAX", "BCL2", "CASP3"],
            "HALLMARK_IL2": ["IL2", "IL2RA"],
        }

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_gmt(tmp_path / "missing.gmt")


class TestLoadMemberships:
    def test_table_by_default(self, enrichment_tsv):
        memberships = load_memberships(enrichment_tsv, padj_cutoff=0.025)
        assert list(memberships) == ["set_a", "set_b"]

    def test_gmt_by_suffix(self, tmp_path):
        path = tmp_path / "library.gmt"
        path.write_text("S1\tdesc\tG1\tG2\nS2\tdesc\tG2\nS3\tdesc\tG3\n")
        memberships = load_memberships(path, padj_cutoff=0.05, max_terms=2)
        assert memberships == {"S1": ["G1", "G2"], "S2": ["G2"]}

    def test_explicit_gmt_format(self, tmp_path):
        path = tmp_path / "library.txt"
        path.write_text("S1\tdesc\tG1\tG2\n")
        assert load_memberships(path, input_format="gmt") == {"S1": ["G1", "G2"]}

    def test_unknown_format(self, enrichment_tsv):
        with pytest.raises(ValueError, match="Unknown input format"):
            load_memberships(enrichment_tsv, input_format="xlsx")


def test_cutoff_without_padj_column_warns(enrichment_tsv, caplog):
    with caplog.at_level(logging.WARNING):
        memberships = load_enrichment_results(enrichment_tsv, padj_column=None, padj_cutoff=0.01)
    # Nothing filtered; file order kept
    assert list(memberships) == ["set_b", "set_a", "set_c", "set_e"]
    assert "padj_cutoff=0.01 ignored" in caplog.text
