"""
Script to wipe every persisted collection.
Run this if stored data got corrupted or you want a fresh dashboard;
services and lab test types come back with their default catalogs.
"""

from app import create_app
from models import db


def reset_database(app):
    with app.app_context():
        # Drop all tables (WARNING: This will delete all data!)
        print("Dropping storage table...")
        db.drop_all()

        print("Creating storage table...")
        db.create_all()

        print("Reloading collections from defaults...")
        app.extensions['hospital'].load_all()


if __name__ == '__main__':
    reset_database(create_app())
    print("Database reset! You can now run the server.")
    print("Note: All previous data has been deleted.")
