"""
CSV Utilities

Reading and writing flat product exports. Descriptions are long HTML, so
the csv field size limit is raised on import.
"""

import csv
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

FIELD_SIZE_LIMIT = 10 * 1024 * 1024

csv.field_size_limit(FIELD_SIZE_LIMIT)


def format_cell(value: Any) -> str:
    """Render a value for a CSV cell: None is empty, lists are comma joined."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple)):
        return ', '.join(format_cell(v) for v in value if v not in (None, ''))
    return str(value)


def read_csv(file_path: str | Path, encoding: str = 'utf-8') -> Iterator[Dict[str, str]]:
    """Yield rows of a CSV file as dicts keyed by header."""
    with open(file_path, 'r', encoding=encoding, newline='') as f:
        yield from csv.DictReader(f)


def write_csv(
    file_path: str | Path,
    rows: List[Dict[str, Any]],
    fieldnames: Optional[List[str]] = None,
    encoding: str = 'utf-8',
) -> int:
    """
    Write rows to a CSV file, creating the parent directory.

    Args:
        file_path: Output path
        rows: Row dicts; keys outside fieldnames are ignored
        fieldnames: Column order (defaults to the first row's keys)
        encoding: File encoding

    Returns:
        Number of rows written (0 writes nothing)
    """
    if not rows:
        return 0

    fieldnames = fieldnames or list(rows[0].keys())
    directory = os.path.dirname(str(file_path))
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(file_path, 'w', encoding=encoding, newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction='ignore')
        writer.writeheader()
        for row in rows:
            writer.writerow({key: format_cell(row.get(key)) for key in fieldnames})

    return len(rows)
