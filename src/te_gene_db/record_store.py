"""Load-once, read-only store for the gene catalog."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

import pandas as pd
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .error_handler import LoadFailure, StoreAlreadyLoaded, StoreNotLoaded
from .logging_config import LogTimer, get_logger
from .models import FIELD_LABELS, FIELD_NAMES, GeneRecord, ResultSet

logger = get_logger('record_store')

DEFAULT_DATA_FILE = 'alzheimers_data.json'

_LABEL_TO_FIELD = {label.lower(): name for name, label in FIELD_LABELS.items()}


def default_records_path() -> Path:
    """Location of the catalog bundled with the package."""
    return Path(__file__).parent / 'data' / DEFAULT_DATA_FILE


class StoreState(Enum):
    """Lifecycle of a record store."""
    UNLOADED = "unloaded"
    LOADED = "loaded"
    FAILED = "failed"


def parse_records(payload: Union[str, bytes]) -> List[GeneRecord]:
    """
    Parse a JSON payload into gene records.

    Args:
        payload: JSON text holding an array of objects

    Returns:
        Records in payload order

    Raises:
        ValueError: If the payload is not valid JSON or not an array of objects
    """
    data = json.loads(payload)

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of records, got {type(data).__name__}")

    records = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"Record {index} is {type(entry).__name__}, expected an object")
        records.append(GeneRecord.from_dict(entry))
    return records


def _column_field(column: Any) -> Optional[str]:
    """Map a tabular header (field name or export label) to a field name."""
    key = str(column).strip()
    if key in FIELD_NAMES:
        return key
    return _LABEL_TO_FIELD.get(key.lower())


def parse_table(path: Path, delimiter: str) -> List[GeneRecord]:
    """Read a CSV/TSV catalog such as a previous search export."""
    df = pd.read_csv(path, sep=delimiter, dtype=str, keep_default_na=False, encoding='utf-8-sig')

    columns = {column: _column_field(column) for column in df.columns}
    columns = {column: name for column, name in columns.items() if name}
    if not columns:
        raise ValueError(f"No recognised gene record columns in {path.name}")

    records = []
    for row in df.to_dict(orient='records'):
        values = {name: row[column] for column, name in columns.items() if row[column] != ''}
        records.append(GeneRecord.from_dict(values))
    return records


class RecordStore:
    """Holds the catalog after a single load and exposes it read-only."""

    def __init__(self, timeout_seconds: float = 30, retry_attempts: int = 0):
        """
        Initialize an empty store.

        Args:
            timeout_seconds: Timeout for URL sources
            retry_attempts: Transport-level retries for a single URL request
        """
        self.timeout_seconds = timeout_seconds
        self.retry_attempts = retry_attempts
        self.state = StoreState.UNLOADED
        self.source: Optional[str] = None
        self.load_error: Optional[LoadFailure] = None
        self._records: ResultSet = ()

    @property
    def is_loaded(self) -> bool:
        return self.state == StoreState.LOADED

    @property
    def records(self) -> ResultSet:
        """The loaded records, in source order."""
        if self.state != StoreState.LOADED:
            raise StoreNotLoaded(f"Record store is {self.state.value}")
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def load(self, source: Optional[Union[str, Path]] = None) -> ResultSet:
        """Load from a URL or a file path; the bundled catalog when None."""
        if source is None:
            source = default_records_path()
        text = str(source)
        if text.startswith(('http://', 'https://')):
            return self.load_url(text)
        return self.load_path(source)

    def load_text(self, payload: Union[str, bytes], source: str = '<text>') -> ResultSet:
        """Load records from a JSON payload."""
        self._begin(source)
        try:
            records = parse_records(payload)
        except ValueError as e:
            self._fail(f"Could not parse record data from {source}: {e}", e)
        return self._complete(records)

    def load_path(self, path: Union[str, Path]) -> ResultSet:
        """Load records from a JSON, CSV or TSV file."""
        path = Path(path)
        self._begin(str(path))
        suffix = path.suffix.lower()

        try:
            with LogTimer(f"Load {path.name}", logger):
                if suffix in ('.csv', '.tsv'):
                    records = parse_table(path, '\t' if suffix == '.tsv' else ',')
                else:
                    records = parse_records(path.read_bytes())
        except OSError as e:
            self._fail(f"Could not read record file {path}: {e}", e)
        except (ValueError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            self._fail(f"Could not parse record file {path}: {e}", e)

        return self._complete(records)

    def load_url(self, url: str) -> ResultSet:
        """Fetch and load records from a URL."""
        self._begin(url)

        session = requests.Session()
        retry_strategy = Retry(
            total=self.retry_attempts,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        try:
            with LogTimer(f"Fetch {url}", logger):
                response = session.get(url, timeout=self.timeout_seconds)
                response.raise_for_status()
        except requests.exceptions.RequestException as e:
            self._fail(f"Failed to load database from {url}: {e}", e)
        finally:
            session.close()

        try:
            records = parse_records(response.content)
        except ValueError as e:
            self._fail(f"Could not parse record data from {url}: {e}", e)
        return self._complete(records)

    def _begin(self, source: str) -> None:
        if self.state != StoreState.UNLOADED:
            raise StoreAlreadyLoaded(f"Record store is already {self.state.value} (source: {self.source})")
        self.source = source

    def _fail(self, message: str, cause: BaseException) -> None:
        self.state = StoreState.FAILED
        self.load_error = LoadFailure(message, source=self.source, cause=cause)
        logger.error(f"Error loading database: {message}")
        raise self.load_error from cause

    def _complete(self, records: List[GeneRecord]) -> ResultSet:
        self._records = tuple(records)
        self.state = StoreState.LOADED
        logger.info(f"Database loaded: {len(self._records)} entries")
        return self._records
