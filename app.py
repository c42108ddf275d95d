from datetime import datetime

from flask import Flask, jsonify, request

from config import Config
from exceptions import ValidationError, validation_error_handler
from hospital import Hospital
from models import db
from stats import appointment_stats, inventory_alerts, inventory_stats, lab_stats


# ---------------- HELPER FUNCTIONS ----------------
def _submission():
    """Flat key/value mapping of the submitted form or JSON body."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form.to_dict()


def create_app(config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    db.init_app(app)
    app.register_error_handler(ValidationError, validation_error_handler)

    hospital = Hospital()
    app.extensions['hospital'] = hospital

    with app.app_context():
        db.create_all()
        app.logger.info("[DB] Using database at: %s", app.config['SQLALCHEMY_DATABASE_URI'])
        hospital.load_all()

    def notify(message, severity='info'):
        app.logger.info("[Notify] %s: %s", severity, message)
        return {'message': message, 'severity': severity}

    def not_found():
        return jsonify({'error': 'not found'}), 404

    def deleted(ok, what):
        if ok:
            return jsonify({'ok': True, 'notification': notify(f'{what} deleted successfully', 'success')})
        return jsonify({'ok': False, 'notification': notify(f'{what} not found, nothing deleted')})

    # ---------------- DASHBOARD ----------------
    @app.route('/api/dashboard/stats')
    def dashboard_stats():
        return jsonify(hospital.dashboard_stats())

    # ---------------- PATIENT ENDPOINTS ----------------
    patients = hospital.patients

    @app.route('/api/patients')
    def api_list_patients():
        return jsonify([patients.view(p) for p in patients.search(request.args.get('q'))])

    @app.route('/api/patients/next-id')
    def api_next_patient_id():
        return jsonify({'patientId': patients.next_display_id(),
                        'registrationDate': datetime.now().date().isoformat()})

    @app.route('/api/patients', methods=['POST'])
    def api_create_patient():
        patient = patients.create(_submission())
        return jsonify({'ok': True, 'patient': patients.view(patient),
                        'notification': notify('Patient registered successfully!', 'success')}), 201

    @app.route('/api/patients/<int:patient_id>')
    def api_get_patient(patient_id):
        patient = patients.find_by_id(patient_id)
        if not patient:
            return not_found()
        return jsonify(patients.view(patient))

    @app.route('/api/patients/<int:patient_id>', methods=['DELETE'])
    def api_delete_patient(patient_id):
        return deleted(patients.delete(patient_id), 'Patient')

    # ---------------- INVENTORY ENDPOINTS ----------------
    inventory = hospital.inventory

    @app.route('/api/inventory')
    def api_list_inventory():
        items = inventory.query(request.args.get('q'), request.args.get('category'))
        return jsonify([inventory.view(item) for item in items])

    @app.route('/api/inventory', methods=['POST'])
    def api_create_inventory():
        item = inventory.create(_submission())
        return jsonify({'ok': True, 'item': inventory.view(item),
                        'notification': notify('Item added successfully!', 'success')}), 201

    @app.route('/api/inventory/<int:item_id>')
    def api_get_inventory(item_id):
        item = inventory.find_by_id(item_id)
        if not item:
            return not_found()
        return jsonify(inventory.view(item))

    @app.route('/api/inventory/<int:item_id>', methods=['PUT'])
    def api_update_inventory(item_id):
        item = inventory.update(item_id, _submission())
        if item is None:
            return jsonify({'ok': False, 'notification': notify('Item not found, nothing updated')})
        return jsonify({'ok': True, 'item': inventory.view(item),
                        'notification': notify('Item updated successfully!', 'success')})

    @app.route('/api/inventory/<int:item_id>', methods=['DELETE'])
    def api_delete_inventory(item_id):
        return deleted(inventory.delete(item_id), 'Item')

    @app.route('/api/inventory/stats')
    def api_inventory_stats():
        return jsonify(inventory_stats(inventory.all()))

    @app.route('/api/inventory/alerts')
    def api_inventory_alerts():
        alerts = inventory_alerts(inventory.all())
        return jsonify({
            'alerts': alerts,
            'count': len(alerts)
        })

    # ---------------- SERVICE ENDPOINTS ----------------
    services = hospital.services

    @app.route('/api/services')
    def api_list_services():
        return jsonify(services.search(request.args.get('q')))

    @app.route('/api/services', methods=['POST'])
    def api_create_service():
        service = services.create(_submission())
        return jsonify({'ok': True, 'service': service,
                        'notification': notify('Service added successfully!', 'success')}), 201

    @app.route('/api/services/<int:service_id>')
    def api_get_service(service_id):
        service = services.find_by_id(service_id)
        if not service:
            return not_found()
        return jsonify(service)

    @app.route('/api/services/<int:service_id>', methods=['PUT'])
    def api_update_service(service_id):
        service = services.update(service_id, _submission())
        if service is None:
            return jsonify({'ok': False, 'notification': notify('Service not found, nothing updated')})
        return jsonify({'ok': True, 'service': service,
                        'notification': notify('Service updated successfully!', 'success')})

    @app.route('/api/services/<int:service_id>', methods=['DELETE'])
    def api_delete_service(service_id):
        return deleted(services.delete(service_id), 'Service')

    # ---------------- LAB ENDPOINTS ----------------
    lab_tests = hospital.lab_tests

    @app.route('/api/lab/test-types')
    def api_list_test_types():
        return jsonify(hospital.test_types.search(request.args.get('q')))

    @app.route('/api/lab/tests')
    def api_list_lab_tests():
        return jsonify(lab_tests.search(request.args.get('q')))

    @app.route('/api/lab/tests', methods=['POST'])
    def api_create_lab_test():
        test = lab_tests.create(_submission())
        return jsonify({'ok': True, 'test': test,
                        'notification': notify('Lab test ordered successfully!', 'success')}), 201

    @app.route('/api/lab/tests/<test_id>')
    def api_get_lab_test(test_id):
        test = lab_tests.find_by_id(test_id)
        if not test:
            return not_found()
        return jsonify(test)

    @app.route('/api/lab/tests/<test_id>/status', methods=['POST'])
    def api_update_lab_test_status(test_id):
        test = lab_tests.update_status(test_id, _submission().get('status'))
        if test is None:
            return jsonify({'ok': False, 'notification': notify('Lab test not found, nothing updated')})
        return jsonify({'ok': True, 'test': test,
                        'notification': notify(f"Lab test marked {test['status']}", 'success')})

    @app.route('/api/lab/tests/<test_id>', methods=['DELETE'])
    def api_delete_lab_test(test_id):
        return deleted(lab_tests.delete(test_id), 'Lab test')

    @app.route('/api/lab/stats')
    def api_lab_stats():
        return jsonify(lab_stats(lab_tests.all()))

    # ---------------- APPOINTMENT ENDPOINTS ----------------
    appointments = hospital.appointments

    @app.route('/api/appointments')
    def api_list_appointments():
        return jsonify(appointments.search(request.args.get('q')))

    @app.route('/api/appointments', methods=['POST'])
    def api_create_appointment():
        appointment = appointments.create(_submission())
        return jsonify({'ok': True, 'appointment': appointment,
                        'notification': notify('Appointment scheduled successfully!', 'success')}), 201

    @app.route('/api/appointments/<appointment_id>')
    def api_get_appointment(appointment_id):
        appointment = appointments.find_by_id(appointment_id)
        if not appointment:
            return not_found()
        return jsonify(appointment)

    @app.route('/api/appointments/<appointment_id>/cancel', methods=['POST'])
    def api_cancel_appointment(appointment_id):
        appointment = appointments.cancel(appointment_id)
        if appointment is None:
            return jsonify({'ok': False, 'notification': notify('Appointment not found, nothing cancelled')})
        return jsonify({'ok': True, 'appointment': appointment,
                        'notification': notify('Appointment cancelled successfully', 'success')})

    @app.route('/api/appointments/<appointment_id>', methods=['DELETE'])
    def api_delete_appointment(appointment_id):
        return deleted(appointments.delete(appointment_id), 'Appointment')

    @app.route('/api/appointments/stats')
    def api_appointment_stats():
        return jsonify(appointment_stats(appointments.all()))

    return app


# ---------------- MAIN ----------------
if __name__ == '__main__':
    app = create_app()
    app.run(debug=True, host='127.0.0.1', port=5000)
