"""Data models for the gene database."""

from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    return value


@dataclass(frozen=True)
class GeneRecord:
    """One row of the gene catalog.

    Every field is optional. ``None`` means the field was absent from the
    source payload and is kept distinct from an empty string.
    """

    gene_name: Optional[str] = None
    variant: Optional[str] = None
    disease: Optional[str] = None
    function: Optional[str] = None
    ad_mechanism: Optional[str] = None
    oxidative_stress: Optional[str] = None
    angiogenesis: Optional[str] = None
    neural_survival: Optional[str] = None
    te_relevance: Optional[str] = None
    scaffold_strategy: Optional[str] = None
    cell_type: Optional[str] = None
    growth_factors: Optional[str] = None
    biomaterial_suggestion: Optional[str] = None
    regeneration_outcome: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'GeneRecord':
        """Build a record from a mapping, ignoring unknown keys.

        Lists and objects in the payload are frozen into tuples and
        read-only mappings.
        """
        return cls(**{name: _freeze(data[name]) for name in FIELD_NAMES if name in data})

    def values(self) -> Iterator[Any]:
        """Yield field values in canonical order."""
        for name in FIELD_NAMES:
            yield getattr(self, name)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in FIELD_NAMES}


FIELD_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(GeneRecord))

# Human-readable column labels, in canonical field order
FIELD_LABELS: Dict[str, str] = {
    'gene_name': 'Gene Name',
    'variant': 'Variant',
    'disease': 'Disease',
    'function': 'Function',
    'ad_mechanism': 'AD Mechanism',
    'oxidative_stress': 'Oxidative Stress',
    'angiogenesis': 'Angiogenesis',
    'neural_survival': 'Neural Survival',
    'te_relevance': 'TE Relevance',
    'scaffold_strategy': 'Scaffold Strategy',
    'cell_type': 'Cell Type',
    'growth_factors': 'Growth Factors',
    'biomaterial_suggestion': 'Biomaterial Suggestion',
    'regeneration_outcome': 'Regeneration Outcome',
}

# Ordered, immutable list of matching records
ResultSet = Tuple[GeneRecord, ...]


class SearchState(Enum):
    """Outcome of a query."""

    EMPTY_QUERY = "empty_query"
    NO_MATCHES = "no_matches"
    MATCHES = "matches"


@dataclass(frozen=True)
class SearchResult:
    """Result of running a query against the record store."""

    query: str
    state: SearchState
    records: ResultSet = ()

    @property
    def total(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class Page:
    """A read-only window onto a result set."""

    items: ResultSet
    page_index: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def start_item(self) -> int:
        """1-based position of the first item on this page."""
        return (self.page_index - 1) * self.page_size + 1

    @property
    def end_item(self) -> int:
        """1-based position of the last item on this page."""
        return min(self.page_index * self.page_size, self.total_items)

    @property
    def has_previous(self) -> bool:
        return self.page_index > 1

    @property
    def has_next(self) -> bool:
        return self.page_index < self.total_pages


@dataclass(frozen=True)
class Primer:
    """A designed PCR primer with derived properties."""

    sequence: str
    length_bp: int
    gc_percent: int
    melting_temp_c: int


@dataclass(frozen=True)
class PrimerPair:
    """Forward and reverse primers flanking a target."""

    forward: Primer
    reverse: Primer
