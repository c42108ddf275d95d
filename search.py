"""
Search helpers for the dashboard tables.

Both filters work on a snapshot of a collection and never touch storage.
"""

from typing import Callable, Dict, List, Optional


def matches(text: str, term: Optional[str]) -> bool:
    """Case-insensitive containment of *term* in *text*."""
    if not term:
        return True
    return term.lower() in (text or '').lower()


def filter_records(records: List[Dict], term: Optional[str],
                   text_of: Callable[[Dict], str]) -> List[Dict]:
    """Keep the records whose displayed text contains *term*.

    ``text_of`` builds the concatenated text of the fields shown for a
    record. An empty term keeps every record.
    """
    if not term:
        return list(records)
    return [r for r in records if matches(text_of(r), term)]


def filter_by_field(records: List[Dict], field: str, value: Optional[str]) -> List[Dict]:
    """Exact match on one field; empty *value* shows all."""
    if not value:
        return list(records)
    return [r for r in records if r.get(field) == value]


def format_number(value) -> str:
    """Numbers as a table cell shows them: ``50.0`` reads ``50``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def display_text(record: Dict, fields) -> str:
    parts = []
    for field in fields:
        value = record.get(field)
        if value is None:
            continue
        parts.append(format_number(value))
    return ' '.join(parts)
