import logging
from datetime import timedelta

from models import db, Cycle, Day, Task

logger = logging.getLogger(__name__)

CYCLES_PER_YEAR = 36
DAYS_PER_CYCLE = 10


# Back-to-back 10-day cycles from start_date; the first is active
def plan_cycles(start_date, count=CYCLES_PER_YEAR):
    cycles = []
    cursor = start_date
    for i in range(1, count + 1):
        end = cursor + timedelta(days=DAYS_PER_CYCLE - 1)
        cycles.append({
            'cycle_number': i,
            'start_date': cursor,
            'end_date': end,
            'status': 'active' if i == 1 else 'upcoming',
            'goal': '',
        })
        cursor = end + timedelta(days=1)
    return cycles


# The 10 blank days of a persisted cycle
def plan_days(cycle):
    days = []
    for j in range(1, DAYS_PER_CYCLE + 1):
        days.append({
            'cycle_id': cycle.id,
            'day_number': j,
            'date': cycle.start_date + timedelta(days=j - 1),
            'goal': '',
            'is_completed': False,
            'notes': '',
        })
    return days


def clear_cycles():
    # tasks -> days -> cycles
    Task.query.delete()
    Day.query.delete()
    Cycle.query.delete()


# Replace the whole year in one transaction; returns the cycle count
def initialize_cycles(start_date):
    logger.info("Initializing cycles from %s", start_date.isoformat())
    try:
        clear_cycles()

        cycles = [Cycle(**c) for c in plan_cycles(start_date)]
        db.session.add_all(cycles)
        # assigns ids for the day foreign keys
        db.session.flush()

        days = []
        for cycle in cycles:
            days.extend(Day(**d) for d in plan_days(cycle))
        db.session.add_all(days)

        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info("Created %d cycles and %d days", len(cycles), len(days))
    return len(cycles)


# day id -> tasks in creation (id) order
def tasks_by_day(day_ids):
    index = {day_id: [] for day_id in day_ids}
    if not index:
        return index
    tasks = Task.query.filter(Task.day_id.in_(list(index))).order_by(Task.id).all()
    for task in tasks:
        index[task.day_id].append(task)
    return index


def day_detail(day):
    data = day.to_dict()
    data['tasks'] = [t.to_dict() for t in tasks_by_day([day.id])[day.id]]
    return data


# Cycle with its days by day number, each day with its tasks
def cycle_detail(cycle):
    days = Day.query.filter_by(cycle_id=cycle.id).order_by(Day.day_number).all()
    index = tasks_by_day([d.id for d in days])

    days_data = []
    for day in days:
        day_data = day.to_dict()
        day_data['tasks'] = [t.to_dict() for t in index[day.id]]
        days_data.append(day_data)

    data = cycle.to_dict()
    data['days'] = days_data
    return data
