"""
Coordinator holding one store per collection.

The app factory builds a :class:`Hospital`, loads it inside the application
context and hands it to the routes.
"""

from datetime import date
from typing import Dict, Optional

from storage import LocalStorage
from stats import dashboard_stats
from stores import (AppointmentStore, InventoryStore, LabTestStore, PatientStore,
                    ServiceStore, TestTypeStore)


class Hospital:
    def __init__(self, storage: Optional[LocalStorage] = None):
        self.storage = storage or LocalStorage()
        self.patients = PatientStore(self.storage)
        self.inventory = InventoryStore(self.storage)
        self.services = ServiceStore(self.storage)
        self.test_types = TestTypeStore(self.storage)
        self.lab_tests = LabTestStore(self.storage)
        self.appointments = AppointmentStore(self.storage)

    @property
    def stores(self) -> Dict:
        return {store.key: store for store in (
            self.patients, self.inventory, self.lab_tests,
            self.test_types, self.appointments, self.services,
        )}

    def load_all(self):
        for store in self.stores.values():
            store.load()

    def reset(self):
        """Forget everything persisted and fall back to the defaults."""
        self.storage.clear()
        self.load_all()

    def dashboard_stats(self, today: Optional[date] = None) -> Dict:
        return dashboard_stats(
            patients=self.patients.all(),
            appointments=self.appointments.all(),
            lab_tests=self.lab_tests.all(),
            inventory=self.inventory.all(),
            today=today,
        )
