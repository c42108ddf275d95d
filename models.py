from datetime import datetime

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

class StorageEntry(db.Model):
    __tablename__ = 'storage_entry'

    key = db.Column(db.String(50), primary_key=True)  # e.g., 'patients', 'inventory', 'labTests'
    value = db.Column(db.Text, nullable=False, default='[]')  # JSON-serialized array
    next_id = db.Column(db.Integer, nullable=False, default=1)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    def __repr__(self):
        return f"<StorageEntry {self.key} next_id={self.next_id}>"
