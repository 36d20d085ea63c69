"""Export search results to delimited text or JSON."""

import csv
import io
import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .error_handler import EmptyExport, InvalidInput
from .logging_config import get_logger
from .models import FIELD_LABELS, FIELD_NAMES, GeneRecord

logger = get_logger('exporter')

# (label, field) in output order
EXPORT_COLUMNS: Tuple[Tuple[str, str], ...] = tuple((FIELD_LABELS[name], name) for name in FIELD_NAMES)

EXPORT_FORMATS = ('csv', 'tsv', 'json')

FILENAME_PREFIX = 'TE_Alzheimers_Search_Results'


def _cell(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, (tuple, Mapping)):
        return json.dumps(value, default=dict, ensure_ascii=False)
    return value if isinstance(value, str) else str(value)


def to_delimited_text(results: Sequence[GeneRecord], delimiter: str = ',') -> str:
    """
    Serialize results with a label header and fully quoted data rows.

    Embedded quotes are doubled and absent values become ``""``.

    Args:
        results: Records in result order
        delimiter: Field separator

    Returns:
        Text with ``\\n`` line endings and no trailing newline

    Raises:
        EmptyExport: If there are no results
    """
    if not results:
        raise EmptyExport("No results to export. Please perform a search first.")

    buffer = io.StringIO()
    buffer.write(delimiter.join(label for label, _ in EXPORT_COLUMNS))
    buffer.write('\n')

    writer = csv.writer(buffer, delimiter=delimiter, quoting=csv.QUOTE_ALL, lineterminator='\n')
    for record in results:
        writer.writerow([_cell(getattr(record, name)) for _, name in EXPORT_COLUMNS])

    return buffer.getvalue().rstrip('\n')


def to_json_text(results: Sequence[GeneRecord]) -> str:
    """Serialize results as JSON with a metadata block."""
    if not results:
        raise EmptyExport("No results to export. Please perform a search first.")

    rows: List[Dict[str, Any]] = [
        {label: _cell(getattr(record, name)) for label, name in EXPORT_COLUMNS}
        for record in results
    ]
    output = {
        'metadata': {
            'generated': datetime.now().isoformat(),
            'total_entries': len(rows),
            'columns': [label for label, _ in EXPORT_COLUMNS],
        },
        'results': rows,
    }
    return json.dumps(output, indent=2, ensure_ascii=False)


def export_filename(on_date: Optional[date] = None, extension: str = 'csv') -> str:
    """Dated export name, e.g. ``TE_Alzheimers_Search_Results_2024-01-15.csv``."""
    on_date = on_date or date.today()
    return f"{FILENAME_PREFIX}_{on_date.isoformat()}.{extension}"


def write_export(results: Sequence[GeneRecord],
                 directory: Union[str, Path] = '.',
                 format: str = 'csv',
                 on_date: Optional[date] = None,
                 excel_compatible: bool = False) -> Path:
    """
    Write results to a dated file in ``directory``.

    Args:
        results: Records to export
        directory: Output directory (created if missing)
        format: 'csv', 'tsv' or 'json'
        on_date: Date used in the file name (today when None)
        excel_compatible: Use UTF-8 BOM for Excel compatibility

    Returns:
        Path of the written file

    Raises:
        EmptyExport: If there are no results; no file is written
    """
    if format == 'csv':
        content = to_delimited_text(results, ',')
    elif format == 'tsv':
        content = to_delimited_text(results, '\t')
    elif format == 'json':
        content = to_json_text(results)
    else:
        raise InvalidInput(f"Unsupported export format: {format}")

    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    path = path / export_filename(on_date, format)

    encoding = 'utf-8-sig' if excel_compatible and format != 'json' else 'utf-8'
    with open(path, 'w', encoding=encoding, newline='') as f:
        f.write(content)

    logger.info(f"Exported {len(results)} records to {path}")
    return path
