import pytest

from app import create_app


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'LOG_LEVEL': 'WARNING',
    })
    with app.app_context():
        yield app


@pytest.fixture
def hospital(app):
    return app.extensions['hospital']


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def jane():
    return {
        'firstName': 'Jane',
        'lastName': 'Doe',
        'dateOfBirth': '1990-05-01',
        'gender': 'F',
        'phone': '555-0100',
    }


@pytest.fixture
def gauze():
    return {
        'itemCode': 'SUP001',
        'itemName': 'Gauze Pads',
        'category': 'Supplies',
        'currentStock': '5',
        'minStock': '10',
        'unitPrice': '2.50',
        'supplier': 'MedSupply Co',
    }
