"""
CSV and JSON export for ABC directory records
"""

import csv
import io
import json
import logging
from pathlib import Path
from typing import List, Iterable

from .models import DirectoryRecord
from .parser import clean_text

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    'Name',
    'Header Location',
    'Organization',
    'Address Line 1',
    'Address Line 2',
    'Phone',
    'Fax',
    'Certification Details',
]


def record_to_row(record: DirectoryRecord) -> List[str]:
    """Cleaned field values in CSV_HEADERS order; omitted fields become ''."""
    return [
        clean_text(record.name),
        clean_text(record.header_location),
        clean_text(record.organization),
        clean_text(record.address_line_1),
        clean_text(record.address_line_2),
        clean_text(record.phone),
        clean_text(record.fax),
        clean_text(record.certification_details),
    ]


def records_to_csv(records: Iterable[DirectoryRecord]) -> str:
    """
    Build the CSV document: header row first, then one row per record.

    Every field is double-quoted and embedded quotes are doubled (RFC 4180).
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(CSV_HEADERS)
    for record in records:
        writer.writerow(record_to_row(record))
    return buffer.getvalue()


def save_csv(records: List[DirectoryRecord], path: Path) -> Path:
    """Write records to ``path``, overwriting any previous file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(records_to_csv(records))
    logger.info(f"Data saved to {path}")
    return path


def save_json(records: List[DirectoryRecord], path: Path) -> Path:
    """Write records as a JSON array to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump([record.to_dict() for record in records], f, indent=2, ensure_ascii=False)
    logger.info(f"JSON saved to {path}")
    return path
