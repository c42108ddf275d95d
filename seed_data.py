"""Default catalogs used when nothing has been persisted yet."""

import copy

DEFAULT_SERVICES = [
    {
        'id': 1,
        'serviceCode': 'CONS001',
        'serviceName': 'General Consultation',
        'category': 'consultation',
        'price': 50,
        'duration': 30,
        'department': 'general',
        'status': 'active',
        'description': 'General medical consultation',
    },
    {
        'id': 2,
        'serviceCode': 'LAB001',
        'serviceName': 'Complete Blood Count',
        'category': 'diagnostic',
        'price': 25,
        'duration': 15,
        'department': 'laboratory',
        'status': 'active',
        'description': 'Full blood panel testing',
    },
    {
        'id': 3,
        'serviceCode': 'XRAY001',
        'serviceName': 'Chest X-Ray',
        'category': 'diagnostic',
        'price': 75,
        'duration': 20,
        'department': 'radiology',
        'status': 'active',
        'description': 'Chest radiography examination',
    },
]

DEFAULT_TEST_TYPES = [
    {
        'id': 1,
        'testCode': 'CBC001',
        'testName': 'Complete Blood Count',
        'category': 'Hematology',
        'price': 25,
        'normalRange': 'WBC: 4,000-11,000, RBC: 4.5-5.5M',
    },
    {
        'id': 2,
        'testCode': 'GLU001',
        'testName': 'Blood Glucose',
        'category': 'Chemistry',
        'price': 15,
        'normalRange': '70-100 mg/dL (fasting)',
    },
    {
        'id': 3,
        'testCode': 'LIP001',
        'testName': 'Lipid Panel',
        'category': 'Chemistry',
        'price': 35,
        'normalRange': 'Total Cholesterol < 200 mg/dL',
    },
]


def default_services():
    return copy.deepcopy(DEFAULT_SERVICES)


def default_test_types():
    return copy.deepcopy(DEFAULT_TEST_TYPES)
