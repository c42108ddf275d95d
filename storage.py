"""
Key/value persistence for the dashboard collections.

Each collection lives under one key as a JSON array, the same layout the
browser dashboard kept in local storage. The identifier counter for the
collection is stored next to it.
"""

from typing import List, Optional

from models import db, StorageEntry


class LocalStorage:
    """Thin key/value wrapper around the ``storage_entry`` table."""

    def get_item(self, key: str) -> Optional[str]:
        entry = db.session.get(StorageEntry, key)
        return entry.value if entry else None

    def get_counter(self, key: str) -> Optional[int]:
        entry = db.session.get(StorageEntry, key)
        return entry.next_id if entry else None

    def set_item(self, key: str, value: str, next_id: Optional[int] = None):
        entry = db.session.get(StorageEntry, key)
        if entry is None:
            entry = StorageEntry(key=key, value=value, next_id=next_id or 1)
            db.session.add(entry)
        else:
            entry.value = value
            if next_id is not None:
                entry.next_id = next_id
        db.session.commit()

    def remove_item(self, key: str):
        entry = db.session.get(StorageEntry, key)
        if entry is not None:
            db.session.delete(entry)
            db.session.commit()

    def clear(self):
        StorageEntry.query.delete()
        db.session.commit()

    def keys(self) -> List[str]:
        return [entry.key for entry in StorageEntry.query.order_by(StorageEntry.key).all()]
