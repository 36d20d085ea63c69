"""Free-text search over the gene catalog."""

from typing import Iterable, Optional

from .error_handler import InvalidInput
from .logging_config import LogTimer, get_logger
from .models import GeneRecord, Page, ResultSet, SearchResult, SearchState
from .paginator import DEFAULT_PAGE_SIZE, paginate, total_pages

logger = get_logger('search_engine')


def normalize_query(query: Optional[str]) -> str:
    """Trim and case-fold a query."""
    if query is None:
        return ''
    return query.strip().casefold()


def record_matches(record: GeneRecord, normalized_query: str) -> bool:
    """True if any text field contains the (already normalized) query."""
    return any(
        isinstance(value, str) and normalized_query in value.casefold()
        for value in record.values()
    )


def search(query: Optional[str], records: Iterable[GeneRecord]) -> SearchResult:
    """
    Filter records by case-insensitive substring match on any text field.

    Every field of every record is scanned; there is no index and no
    ranking. Matches keep their original order.

    Args:
        query: Free-text query
        records: Record source, in store order

    Returns:
        SearchResult in the EMPTY_QUERY, NO_MATCHES or MATCHES state
    """
    normalized = normalize_query(query)
    if not normalized:
        return SearchResult(query=normalized, state=SearchState.EMPTY_QUERY)

    with LogTimer(f"Search '{normalized}'", logger):
        matches = tuple(record for record in records if record_matches(record, normalized))

    logger.debug(f"Query '{normalized}' matched {len(matches)} records")
    if not matches:
        return SearchResult(query=normalized, state=SearchState.NO_MATCHES)
    return SearchResult(query=normalized, state=SearchState.MATCHES, records=matches)


class SearchSession:
    """
    Query and paging state for one user.

    Each session owns its current result and page number, so independent
    sessions over the same records never interfere.
    """

    def __init__(self, records: ResultSet, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size <= 0:
            raise InvalidInput(f"Page size must be positive, got {page_size}")
        self.records = records
        self.page_size = page_size
        self.result = SearchResult(query='', state=SearchState.EMPTY_QUERY)
        self.page_index = 1

    @property
    def state(self) -> SearchState:
        return self.result.state

    @property
    def total_pages(self) -> int:
        return total_pages(self.result.total, self.page_size)

    def submit(self, query: Optional[str]) -> SearchResult:
        """Run a new query and return to the first page."""
        self.result = search(query, self.records)
        self.page_index = 1
        return self.result

    def clear(self) -> None:
        """Back to the prompt-to-search state."""
        self.result = SearchResult(query='', state=SearchState.EMPTY_QUERY)
        self.page_index = 1

    def current_page(self) -> Page:
        """The page currently displayed."""
        if self.result.state != SearchState.MATCHES:
            raise InvalidInput("There are no results to page through.")
        return paginate(self.result.records, self.page_index, self.page_size)

    def go_to(self, page_index: int) -> Page:
        """Move to a page; only pages 1..total_pages are reachable."""
        if self.result.state != SearchState.MATCHES:
            raise InvalidInput("There are no results to page through.")
        if not 1 <= page_index <= self.total_pages:
            raise InvalidInput(f"Page {page_index} is out of range (1-{self.total_pages})")
        self.page_index = page_index
        return self.current_page()

    def next_page(self) -> Page:
        return self.go_to(self.page_index + 1)

    def previous_page(self) -> Page:
        return self.go_to(self.page_index - 1)
