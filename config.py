import os
import pathlib

from dotenv import load_dotenv

BASE_DIR = pathlib.Path(__file__).parent.resolve()

load_dotenv(BASE_DIR / '.env')


class Config:
    # Absolute path so the file always lands next to the code, not in an instance folder
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL') or f"sqlite:///{BASE_DIR / 'hospital.db'}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
