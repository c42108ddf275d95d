from flask import jsonify


class HospitalError(Exception):
    """Base error for the dashboard core."""


class ValidationError(HospitalError):
    def __init__(self, field, message):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def validation_error_handler(exc):
    return jsonify({
        'ok': False,
        'error': {'code': 'validation_error', 'field': exc.field, 'message': exc.message},
        'notification': {'message': f'Invalid value for {exc.field}: {exc.message}', 'severity': 'error'},
    }), 400
