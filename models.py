import logging
from flask_sqlalchemy import SQLAlchemy

logger = logging.getLogger(__name__)

db = SQLAlchemy()

CYCLE_STATUSES = ("upcoming", "active", "completed")

# Weekday abbreviations in calendar order (Sunday first)
WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

DEFAULT_REMINDERS = [
    (1, "Set your intentions for this cycle. What is your main focus?"),
    (2, "Break down your goal into small steps."),
    (3, "Momentum is building. Keep going!"),
    (4, "Review your progress. Are you on track?"),
    (5, "Halfway point! Adjust your plan if needed."),
    (6, "Stay consistent. Small efforts add up."),
    (7, "Visualize the successful completion of this cycle."),
    (8, "Finish strong. Clear any remaining blockers."),
    (9, "Prepare for the next cycle. Reflect on this one."),
    (10, "Cycle complete! Celebrate your wins and rest."),
]


# 10-day cycle (36 per year)
class Cycle(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    cycle_number = db.Column(db.Integer, nullable=False)  # 1..36
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)  # start_date + 9 days
    goal = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default="upcoming")
    days = db.relationship('Day', backref='cycle', lazy=True, cascade="all, delete-orphan")

    def to_dict(self):
        return {
            'id': self.id,
            'cycleNumber': self.cycle_number,
            'startDate': self.start_date.isoformat(),
            'endDate': self.end_date.isoformat(),
            'goal': self.goal,
            'status': self.status,
        }


class Day(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    cycle_id = db.Column(db.Integer, db.ForeignKey('cycle.id'), nullable=False)
    day_number = db.Column(db.Integer, nullable=False)  # 1..10
    date = db.Column(db.Date, nullable=False)
    goal = db.Column(db.Text)
    is_completed = db.Column(db.Boolean, default=False)
    notes = db.Column(db.Text)
    tasks = db.relationship('Task', backref='day', lazy=True, cascade="all, delete-orphan")

    __table_args__ = (db.UniqueConstraint('cycle_id', 'day_number', name='unique_cycle_day'),)

    def to_dict(self):
        return {
            'id': self.id,
            'cycleId': self.cycle_id,
            'dayNumber': self.day_number,
            'date': self.date.isoformat(),
            'goal': self.goal,
            'isCompleted': bool(self.is_completed),
            'notes': self.notes,
        }


class Task(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    day_id = db.Column(db.Integer, db.ForeignKey('day.id'), nullable=False)
    content = db.Column(db.Text, nullable=False)
    is_completed = db.Column(db.Boolean, default=False)

    def to_dict(self):
        return {
            'id': self.id,
            'dayId': self.day_id,
            'content': self.content,
            'isCompleted': bool(self.is_completed),
        }


# Static hint per day-of-cycle, seeded once
class ReminderTemplate(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    day_number = db.Column(db.Integer, nullable=False)
    message = db.Column(db.Text, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'dayNumber': self.day_number,
            'message': self.message,
        }


class Alarm(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    time = db.Column(db.String(5), nullable=False)  # HH:mm
    is_enabled = db.Column(db.Boolean, default=True)
    # "Mon,Wed,Fri"; empty string or NULL means every day
    _repeat_days = db.Column('repeat_days', db.String(27))
    message = db.Column(db.Text)
    sound = db.Column(db.String(50), default="default")

    @property
    def repeat_days(self):
        if self._repeat_days is None:
            return None
        return [d for d in self._repeat_days.split(',') if d]

    @repeat_days.setter
    def repeat_days(self, days):
        if days is None:
            self._repeat_days = None
        else:
            # stored in calendar order, duplicates dropped
            self._repeat_days = ','.join(d for d in WEEKDAYS if d in days)

    # No repeat days means every day, not never
    def fires_on(self, weekday):
        days = self.repeat_days
        if not days:
            return True
        return weekday in days

    # Compared to the minute against a wall-clock datetime
    def is_due(self, now):
        if not self.is_enabled:
            return False
        if self.time != now.strftime('%H:%M'):
            return False
        # datetime.weekday() is Monday=0
        return self.fires_on(WEEKDAYS[(now.weekday() + 1) % 7])

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'time': self.time,
            'isEnabled': bool(self.is_enabled),
            'repeatDays': self.repeat_days,
            'message': self.message,
            'sound': self.sound,
        }


# Seed-if-empty; edited templates survive restarts
def seed_reminders():
    if ReminderTemplate.query.first() is not None:
        return 0
    for day_number, message in DEFAULT_REMINDERS:
        db.session.add(ReminderTemplate(day_number=day_number, message=message))
    db.session.commit()
    logger.info("Seeded %d reminder templates", len(DEFAULT_REMINDERS))
    return len(DEFAULT_REMINDERS)
