"""Tests for display helpers."""

from te_gene_db.display import (
    PLACEHOLDER, display_value, format_page_window, format_primer, format_row,
    te_relevance_category, truncate_text,
)
from te_gene_db.models import GeneRecord, Primer


class TestDisplay:
    """Test cases for text rendering."""

    def test_placeholder_for_absent_and_empty(self):
        assert display_value(None) == PLACEHOLDER
        assert display_value("") == PLACEHOLDER
        assert display_value("APOE") == "APOE"

    def test_truncate_text(self):
        assert truncate_text(None, 10) == PLACEHOLDER
        assert truncate_text("short", 10) == "short"
        assert truncate_text("x" * 12, 10) == "x" * 10 + "..."

    def test_te_relevance_category(self):
        assert te_relevance_category("Neural tissue engineering") == "neural"
        assert te_relevance_category("Neuroimmune interface engineering") == "neuroimmune"
        assert te_relevance_category("Neurovascular unit engineering") == "neurovascular"
        assert te_relevance_category("Metabolic support engineering") == "metabolic"
        assert te_relevance_category("Other") is None
        assert te_relevance_category(None) is None

    def test_format_row(self):
        record = GeneRecord(gene_name="APOE", function="f" * 60)
        cells = format_row(record)

        assert len(cells) == 10
        assert cells[0] == "APOE"
        assert cells[1] == PLACEHOLDER
        assert cells[2] == "f" * 50 + "..."

    def test_format_primer(self):
        lines = format_primer("Forward Primer", Primer("ATGCATGCAT", 10, 40, 28))

        assert lines[0] == "Forward Primer  (Tm: 28°C)"
        assert lines[1].strip() == "5'-ATGCATGCAT-3'"
        assert lines[2].strip() == "Length: 10 bp | GC: 40%"

    def test_format_page_window(self):
        assert format_page_window([1, None, 4, 5, 6, None, 9], 5, 9) == "< 1 ... 4 [5] 6 ... 9 >"
        assert format_page_window([1, 2, 3], 1, 3) == "[1] 2 3 >"
