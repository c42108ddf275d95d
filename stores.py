"""
Entity stores for the dashboard collections.

One generic :class:`EntityStore` keeps a collection in memory, serializes the
whole collection to :class:`storage.LocalStorage` after every mutation and
hands out copies of its records. The per-kind subclasses below only declare
their storage key, numeric fields, defaults and display columns.

Stores must be used inside a Flask application context.
"""

import json
import math
import threading
from datetime import datetime
from typing import Dict, List, Optional

from flask import current_app

from exceptions import ValidationError
from search import display_text, filter_by_field, filter_records, format_number
from seed_data import default_services, default_test_types
from stats import calculate_age, is_low_stock, is_out_of_stock, to_date


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def to_int(field: str, value) -> int:
    """Coerce form input to an integer, truncating decimals like the form did."""
    if isinstance(value, bool):
        raise ValidationError(field, 'a whole number is required')
    if isinstance(value, int):
        return value
    if _blank(value):
        raise ValidationError(field, 'a whole number is required')
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    number = to_float(field, text)
    return int(number)


def to_float(field: str, value) -> float:
    if isinstance(value, bool) or _blank(value):
        raise ValidationError(field, 'a number is required')
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f'{value!r} is not a number')
    if not math.isfinite(number):
        raise ValidationError(field, f'{value!r} is not a number')
    return number


class EntityStore:
    key = None
    label = 'record'
    lookup_field = 'id'
    int_fields = ()
    float_fields = ()
    defaults = {}
    created_field = None
    updated_field = None
    statuses = ()
    display_fields = ()
    money_fields = ()
    date_fields = ()
    readonly_fields = ('id',)

    def __init__(self, storage):
        self.storage = storage
        self._items: List[Dict] = []
        self._next_id = 1
        self._lock = threading.RLock()

    # ---------------- PERSISTENCE ----------------
    def seed(self) -> List[Dict]:
        return []

    def _read(self) -> Optional[List[Dict]]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return None
        try:
            items = json.loads(raw)
        except ValueError as e:
            current_app.logger.warning('[Storage] %s is corrupted (%s), using defaults', self.key, e)
            return None
        if not isinstance(items, list) or not all(isinstance(r, dict) for r in items):
            current_app.logger.warning('[Storage] %s is not a list of records, using defaults', self.key)
            return None
        return items

    def load(self) -> List[Dict]:
        with self._lock:
            items = self._read()
            if items is None:
                items = self.seed()
            self._items = items
            highest = max((r['id'] for r in items if type(r.get('id')) is int), default=0)
            self._next_id = max(self.storage.get_counter(self.key) or 1, highest + 1)
            current_app.logger.info('[Store] Loaded %d %s record(s)', len(items), self.key)
            return self.all()

    def _flush(self):
        self.storage.set_item(self.key, json.dumps(self._items), next_id=self._next_id)

    # ---------------- HELPERS ----------------
    def _coerce(self, fields: Dict, partial: bool = False) -> Dict:
        record = dict(fields)
        for field in self.int_fields:
            if field in record or not partial:
                record[field] = to_int(field, record.get(field))
        for field in self.float_fields:
            if field in record or not partial:
                record[field] = to_float(field, record.get(field))
        return record

    def _check_status(self, record: Dict):
        if self.statuses and 'status' in record and record['status'] not in self.statuses:
            raise ValidationError('status', f"must be one of {', '.join(self.statuses)}")

    def _find(self, key) -> Optional[Dict]:
        return next((r for r in self._items if r.get(self.lookup_field) == key), None)

    def _now(self) -> str:
        return datetime.now().isoformat()

    def _generate_key(self, record: Dict, prefix: str) -> str:
        """Next ``PREFIX####`` key not already taken, moving the record's id along with it."""
        number = record['id']
        while self._find(prefix + str(number).zfill(4)) is not None:
            number += 1
        record['id'] = number
        return prefix + str(number).zfill(4)

    def prepare(self, record: Dict):
        """Fill kind-specific fields on a new record after its id is assigned."""

    # ---------------- CRUD ----------------
    def create(self, fields: Dict) -> Dict:
        with self._lock:
            record = self._coerce(fields)
            for name, value in self.defaults.items():
                if _blank(record.get(name)):
                    record[name] = value
            record['id'] = self._next_id
            now = self._now()
            for field in (self.created_field, self.updated_field):
                if field:
                    record[field] = now
            self.prepare(record)
            self._check_status(record)
            if self.lookup_field != 'id' and self._find(record[self.lookup_field]) is not None:
                raise ValidationError(self.lookup_field, f"{record[self.lookup_field]} already exists")

            self._next_id = record['id'] + 1
            self._items.append(record)
            self._flush()
            current_app.logger.info('[Store] Created %s %s', self.label, record[self.lookup_field])
            return dict(record)

    def update(self, key, fields: Dict) -> Optional[Dict]:
        with self._lock:
            record = self._find(key)
            if record is None:
                current_app.logger.info('[Store] No %s %s to update', self.label, key)
                return None
            locked = set(self.readonly_fields) | {self.lookup_field}
            changes = self._coerce({k: v for k, v in fields.items() if k not in locked}, partial=True)
            self._check_status(changes)
            record.update(changes)
            if self.updated_field:
                record[self.updated_field] = self._now()
            self._flush()
            return dict(record)

    def delete(self, key) -> bool:
        with self._lock:
            index = next((i for i, r in enumerate(self._items) if r.get(self.lookup_field) == key), None)
            if index is None:
                current_app.logger.info('[Store] No %s %s to delete', self.label, key)
                return False
            del self._items[index]
            self._flush()
            current_app.logger.info('[Store] Deleted %s %s', self.label, key)
            return True

    def find_by_id(self, key) -> Optional[Dict]:
        with self._lock:
            record = self._find(key)
            return dict(record) if record else None

    def all(self) -> List[Dict]:
        with self._lock:
            return [dict(r) for r in self._items]

    def count(self) -> int:
        return len(self._items)

    # ---------------- QUERIES ----------------
    def text_of(self, record: Dict) -> str:
        parts = [display_text(record, self.display_fields)]
        for field in self.money_fields:
            if record.get(field) is not None:
                parts.append('$' + format_number(record[field]))
        for field in self.date_fields:
            day = to_date(record.get(field))
            if day:
                parts.append(day.isoformat())
        return ' '.join(parts)

    def search(self, term: Optional[str]) -> List[Dict]:
        return filter_records(self.all(), term, self.text_of)

    def view(self, record: Dict) -> Dict:
        """Record as shown in a table row, with derived values."""
        return record


class PatientStore(EntityStore):
    key = 'patients'
    label = 'patient'
    created_field = 'registrationDate'
    display_fields = ('patientId', 'firstName', 'lastName')
    readonly_fields = ('id', 'patientId')

    @staticmethod
    def display_id(number: int) -> str:
        return 'PAT' + str(number).zfill(4)

    def next_display_id(self) -> str:
        with self._lock:
            return self.display_id(self._next_id)

    def prepare(self, record):
        record['patientId'] = self.display_id(record['id'])

    def text_of(self, record):
        registered = to_date(record.get('registrationDate'))
        age = calculate_age(record.get('dateOfBirth'))
        parts = [
            display_text(record, self.display_fields),
            '' if age is None else str(age),
            display_text(record, ('gender', 'phone')),
            registered.isoformat() if registered else '',
        ]
        return ' '.join(parts)

    def view(self, record):
        return {**record, 'age': calculate_age(record.get('dateOfBirth'))}


class InventoryStore(EntityStore):
    key = 'inventory'
    label = 'item'
    int_fields = ('currentStock', 'minStock')
    float_fields = ('unitPrice',)
    updated_field = 'lastUpdated'
    display_fields = ('itemCode', 'itemName', 'category', 'currentStock', 'minStock', 'supplier')
    money_fields = ('unitPrice',)
    date_fields = ('lastUpdated',)

    def filter_by_category(self, category: Optional[str], records: Optional[List[Dict]] = None) -> List[Dict]:
        return filter_by_field(self.all() if records is None else records, 'category', category)

    def query(self, term: Optional[str] = None, category: Optional[str] = None) -> List[Dict]:
        return self.filter_by_category(category, self.search(term))

    def view(self, record):
        return {**record, 'lowStock': is_low_stock(record), 'outOfStock': is_out_of_stock(record)}


class ServiceStore(EntityStore):
    key = 'services'
    label = 'service'
    int_fields = ('duration',)
    float_fields = ('price',)
    statuses = ('active', 'inactive')
    display_fields = ('serviceCode', 'serviceName', 'category', 'duration', 'department', 'status')
    money_fields = ('price',)

    def seed(self):
        return default_services()

    def prepare(self, record):
        record['status'] = 'active'


class TestTypeStore(EntityStore):
    key = 'testTypes'
    label = 'test type'
    float_fields = ('price',)
    display_fields = ('testCode', 'testName', 'category', 'price', 'normalRange')

    def seed(self):
        return default_test_types()


class LabTestStore(EntityStore):
    key = 'labTests'
    label = 'lab test'
    lookup_field = 'testId'
    float_fields = ('price',)
    statuses = ('pending', 'completed', 'cancelled')
    defaults = {'status': 'pending'}
    display_fields = ('testId', 'patientName', 'testType', 'status', 'doctor')
    money_fields = ('price',)
    date_fields = ('dateOrdered',)

    def prepare(self, record):
        if _blank(record.get('testId')):
            record['testId'] = self._generate_key(record, 'LAB')
        if _blank(record.get('dateOrdered')):
            record['dateOrdered'] = self._now()
        if _blank(record.get('dateCompleted')):
            record['dateCompleted'] = None
        if record['status'] == 'completed' and record['dateCompleted'] is None:
            record['dateCompleted'] = self._now()

    def update_status(self, test_id: str, status: str) -> Optional[Dict]:
        """Set the status; only a completed test carries a completion date."""
        with self._lock:
            current = self._find(test_id)
            changes = {'status': status}
            if status != 'completed':
                changes['dateCompleted'] = None
            elif current is None or current.get('status') != 'completed' or not current.get('dateCompleted'):
                changes['dateCompleted'] = self._now()
            return self.update(test_id, changes)


class AppointmentStore(EntityStore):
    key = 'appointments'
    label = 'appointment'
    lookup_field = 'appointmentId'
    statuses = ('scheduled', 'cancelled', 'completed')
    defaults = {'status': 'scheduled'}
    display_fields = ('appointmentId', 'patientName', 'doctor', 'date', 'time', 'type', 'status')

    def prepare(self, record):
        if _blank(record.get('appointmentId')):
            record['appointmentId'] = self._generate_key(record, 'APT')

    def set_status(self, appointment_id: str, status: str) -> Optional[Dict]:
        return self.update(appointment_id, {'status': status})

    def cancel(self, appointment_id: str) -> Optional[Dict]:
        return self.set_status(appointment_id, 'cancelled')
