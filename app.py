import os
import logging
from flask import Flask, request, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from models import db, Cycle, Day, Task, ReminderTemplate, Alarm, seed_reminders
from schemas import (
    InitializeCycles, CycleUpdate, DayUpdate, TaskCreate, TaskUpdate,
    AlarmCreate, AlarmUpdate,
)
from cycles import initialize_cycles, cycle_detail, day_detail

logging.basicConfig(
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = Flask(__name__)
basedir = os.path.abspath(os.path.dirname(__file__))

# Database settings
app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get(
    'DATABASE_URL',
    'sqlite:///' + os.path.join(basedir, 'cycles.db'),
)
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

db.init_app(app)

with app.app_context():
    # No migrations: tables are created in place
    db.create_all()
    seed_reminders()


def read_json():
    # A missing body validates like an empty one; a broken one is a 400
    if not request.data:
        return {}
    return request.get_json()


def apply_changes(instance, changes):
    for key, value in changes.items():
        setattr(instance, key, value)


def not_found(name):
    return jsonify({'message': f'{name} not found'}), 404


# --- Error handlers ---

@app.errorhandler(ValidationError)
def handle_validation_error(err):
    first = err.errors()[0]
    body = {'message': first['msg']}
    if first.get('loc'):
        body['field'] = '.'.join(str(p) for p in first['loc'])
    return jsonify(body), 400


@app.errorhandler(HTTPException)
def handle_http_error(err):
    return jsonify({'message': err.description}), err.code


@app.errorhandler(Exception)
def handle_unexpected_error(err):
    app.logger.exception("Unhandled error on %s %s", request.method, request.path)
    db.session.rollback()
    return jsonify({'message': 'Internal server error'}), 500


# --- Cycles ---

@app.route('/api/cycles', methods=['GET'])
def get_cycles():
    cycles = Cycle.query.order_by(Cycle.cycle_number).all()
    return jsonify([c.to_dict() for c in cycles])


@app.route('/api/cycles/<int:cycle_id>', methods=['GET'])
def get_cycle(cycle_id):
    cycle = db.session.get(Cycle, cycle_id)
    if cycle is None:
        return not_found('Cycle')
    return jsonify(cycle_detail(cycle))


@app.route('/api/cycles/<int:cycle_id>', methods=['PUT'])
def update_cycle(cycle_id):
    changes = CycleUpdate.model_validate(read_json()).changes()
    cycle = db.session.get(Cycle, cycle_id)
    if cycle is None:
        return not_found('Cycle')

    apply_changes(cycle, changes)
    db.session.commit()
    return jsonify(cycle.to_dict())


# Reset the year: 36 cycles x 10 days from startDate
@app.route('/api/cycles/initialize', methods=['POST'])
def initialize():
    payload = InitializeCycles.model_validate(read_json())
    try:
        count = initialize_cycles(payload.start_date)
    except Exception:
        app.logger.exception("Failed to initialize cycles")
        return jsonify({'message': 'Failed to initialize cycles'}), 500
    return jsonify({'message': f'Initialized {count} cycles', 'count': count}), 201


# --- Days ---

@app.route('/api/days/<int:day_id>', methods=['GET'])
def get_day(day_id):
    day = db.session.get(Day, day_id)
    if day is None:
        return not_found('Day')
    return jsonify(day_detail(day))


@app.route('/api/days/<int:day_id>', methods=['PUT'])
def update_day(day_id):
    changes = DayUpdate.model_validate(read_json()).changes()
    day = db.session.get(Day, day_id)
    if day is None:
        return not_found('Day')

    apply_changes(day, changes)
    db.session.commit()
    return jsonify(day.to_dict())


# --- Tasks ---

@app.route('/api/tasks', methods=['POST'])
def add_task():
    payload = TaskCreate.model_validate(read_json())
    task = Task(**payload.model_dump())
    db.session.add(task)
    db.session.commit()
    return jsonify(task.to_dict()), 201


@app.route('/api/tasks/<int:task_id>', methods=['PUT'])
def update_task(task_id):
    changes = TaskUpdate.model_validate(read_json()).changes()
    task = db.session.get(Task, task_id)
    if task is None:
        return not_found('Task')

    apply_changes(task, changes)
    db.session.commit()
    return jsonify(task.to_dict())


# Deleting a missing task still succeeds
@app.route('/api/tasks/<int:task_id>', methods=['DELETE'])
def delete_task(task_id):
    Task.query.filter_by(id=task_id).delete()
    db.session.commit()
    return '', 204


# --- Reminders ---

@app.route('/api/reminders', methods=['GET'])
def get_reminders():
    reminders = ReminderTemplate.query.order_by(ReminderTemplate.day_number).all()
    return jsonify([r.to_dict() for r in reminders])


# --- Alarms ---

@app.route('/api/alarms', methods=['GET'])
def get_alarms():
    alarms = Alarm.query.order_by(Alarm.time).all()
    return jsonify([a.to_dict() for a in alarms])


@app.route('/api/alarms', methods=['POST'])
def add_alarm():
    payload = AlarmCreate.model_validate(read_json())
    alarm = Alarm(**payload.model_dump())
    db.session.add(alarm)
    db.session.commit()
    return jsonify(alarm.to_dict()), 201


@app.route('/api/alarms/<int:alarm_id>', methods=['PUT'])
def update_alarm(alarm_id):
    changes = AlarmUpdate.model_validate(read_json()).changes()
    alarm = db.session.get(Alarm, alarm_id)
    if alarm is None:
        return not_found('Alarm')

    apply_changes(alarm, changes)
    db.session.commit()
    return jsonify(alarm.to_dict())


@app.route('/api/alarms/<int:alarm_id>', methods=['DELETE'])
def delete_alarm(alarm_id):
    Alarm.query.filter_by(id=alarm_id).delete()
    db.session.commit()
    return '', 204


if __name__ == '__main__':
    # Accept external connections on port 5001 by default
    app.run(debug=True, port=int(os.environ.get('PORT', 5001)), host='0.0.0.0')
