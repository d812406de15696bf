import os
import requests

BASE_URL = os.environ.get('BASE_URL', 'http://127.0.0.1:5001/api')
START_DATE = '2024-01-01'

def test_api():
    print(f"Testing API on {BASE_URL}")

    # 1. Initialize the year (destroys existing cycles)
    r = requests.post(f"{BASE_URL}/cycles/initialize", json={'startDate': START_DATE})
    assert r.status_code == 201
    assert r.json() == {'message': 'Initialized 36 cycles', 'count': 36}
    print("Initialized 36 cycles")

    # 2. Check the cycle layout
    r = requests.get(f"{BASE_URL}/cycles")
    cycles = r.json()
    assert len(cycles) == 36
    assert cycles[0]['startDate'] == '2024-01-01'
    assert cycles[0]['endDate'] == '2024-01-10'
    assert cycles[0]['status'] == 'active'
    assert cycles[1]['startDate'] == '2024-01-11'
    print("Cycle layout (Correct)")

    # 3. Add a task to day 5 of cycle 1
    r = requests.get(f"{BASE_URL}/cycles/{cycles[0]['id']}")
    days = r.json()['days']
    assert [d['dayNumber'] for d in days] == list(range(1, 11))
    day_id = days[4]['id']

    r = requests.post(f"{BASE_URL}/tasks", json={'dayId': day_id, 'content': 'Read 10 pages', 'isCompleted': False})
    assert r.status_code == 201
    task_id = r.json()['id']
    print(f"Created task: {task_id}")

    # 4. Complete it, content unchanged
    r = requests.put(f"{BASE_URL}/tasks/{task_id}", json={'isCompleted': True})
    assert r.status_code == 200
    assert r.json()['isCompleted'] == True
    assert r.json()['content'] == 'Read 10 pages'
    print("Task completed (Correct)")

    # 5. Task shows up in the nested cycle
    r = requests.get(f"{BASE_URL}/cycles/{cycles[0]['id']}")
    day5 = r.json()['days'][4]
    assert [t['id'] for t in day5['tasks']] == [task_id]
    print("Nested fetch (Correct)")

    # 6. Delete twice
    for _ in range(2):
        r = requests.delete(f"{BASE_URL}/tasks/{task_id}")
        assert r.status_code == 204
    print("Idempotent delete (Correct)")

    # 7. Missing cycle
    r = requests.put(f"{BASE_URL}/cycles/999999", json={'goal': 'x'})
    assert r.status_code == 404
    assert r.json() == {'message': 'Cycle not found'}

    # 8. Alarm CRUD (Cleanup at the end)
    r = requests.post(f"{BASE_URL}/alarms", json={'name': 'Morning', 'time': '07:30', 'repeatDays': []})
    assert r.status_code == 201
    alarm_id = r.json()['id']
    r = requests.put(f"{BASE_URL}/alarms/{alarm_id}", json={'isEnabled': False})
    assert r.status_code == 200
    assert r.json()['isEnabled'] == False
    assert r.json()['time'] == '07:30'
    r = requests.delete(f"{BASE_URL}/alarms/{alarm_id}")
    assert r.status_code == 204
    print("Alarm CRUD (Correct)")

    print("\nALL API TESTS PASSED!")

if __name__ == '__main__':
    try:
        test_api()
    except Exception as e:
        print(f"\nTEST FAILED: {e}")
        exit(1)
