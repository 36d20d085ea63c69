"""Text rendering helpers for records, primers and search states."""

from typing import Any, List, Optional, Tuple

from .models import GeneRecord, Primer

PLACEHOLDER = '-'

EMPTY_QUERY_MESSAGE = "Enter a search term to explore the database"
EMPTY_QUERY_HINT = 'Try searching for "APOE", "APP", or "Neural tissue engineering"'
NO_RESULTS_MESSAGE = "No results found"
NO_RESULTS_HINT = "Try a different search term"
LOAD_FAILURE_MESSAGE = "Failed to load database."

# (header, field, max width or None for untruncated)
RESULT_TABLE_COLUMNS: Tuple[Tuple[str, str, Optional[int]], ...] = (
    ('Gene', 'gene_name', None),
    ('Variant', 'variant', None),
    ('Function', 'function', 50),
    ('AD Mechanism', 'ad_mechanism', 50),
    ('TE Relevance', 'te_relevance', None),
    ('Scaffold Strategy', 'scaffold_strategy', 50),
    ('Cell Type', 'cell_type', 40),
    ('Growth Factors', 'growth_factors', None),
    ('Biomaterial', 'biomaterial_suggestion', 40),
    ('Outcome', 'regeneration_outcome', 50),
)

# Checked in order; first substring hit wins
TE_CATEGORIES = (
    ('Neural tissue engineering', 'neural'),
    ('Neuroimmune', 'neuroimmune'),
    ('Neurovascular', 'neurovascular'),
    ('Metabolic', 'metabolic'),
)


def display_value(value: Any) -> str:
    """Absent and empty values both show as the placeholder."""
    if value is None or value == '':
        return PLACEHOLDER
    return str(value)


def truncate_text(text: Any, max_length: int) -> str:
    if not text:
        return PLACEHOLDER
    text = str(text)
    if len(text) <= max_length:
        return text
    return text[:max_length] + '...'


def te_relevance_category(te_relevance: Optional[str]) -> Optional[str]:
    """Badge category for a TE relevance value, if it names one."""
    if not isinstance(te_relevance, str):
        return None
    for needle, category in TE_CATEGORIES:
        if needle in te_relevance:
            return category
    return None


def format_row(record: GeneRecord) -> List[str]:
    """Summary table cells for one record."""
    cells = []
    for _, field, width in RESULT_TABLE_COLUMNS:
        value = getattr(record, field)
        cells.append(truncate_text(value, width) if width else display_value(value))
    return cells


def format_primer(label: str, primer: Primer) -> List[str]:
    return [
        f"{label}  (Tm: {primer.melting_temp_c}°C)",
        f"  5'-{primer.sequence}-3'",
        f"  Length: {primer.length_bp} bp | GC: {primer.gc_percent}%",
    ]


def format_page_window(window: List[Optional[int]], current: int, total: int) -> str:
    """Navigation line such as ``< 1 ... 4 [5] 6 ... 9 >``."""
    parts = ['<' if current > 1 else ' ']
    for page in window:
        if page is None:
            parts.append('...')
        elif page == current:
            parts.append(f"[{page}]")
        else:
            parts.append(str(page))
    parts.append('>' if current < total else ' ')
    return ' '.join(parts).strip()
