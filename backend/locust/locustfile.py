"""
Locust Load Test Suite

Courts are created by an admin, so point the run at an existing one:
  COURT_ID=1 locust -f locustfile.py --tags concurrency   # Test double booking
  COURT_ID=1 locust -f locustfile.py --tags throughput    # Test availability cache
  COURT_ID=1 locust -f locustfile.py --tags edge          # Test bad input
  COURT_ID=1 locust -f locustfile.py                      # All tests
"""

import os
import random
import string
from datetime import date, timedelta

from locust import HttpUser, between, events, tag, task

COURT_ID = int(os.getenv("COURT_ID", "1"))
PASSWORD = "loadtest123"

# Every ConcurrencyUser races for this one hour
RACE_DATE = (date.today() + timedelta(days=7)).isoformat()
RACE_SLOT = {"start_time": "18:00:00", "end_time": "19:00:00"}


def random_email():
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=10))
    return f"load_{suffix}@test.com"


def register_and_login(client) -> dict:
    email = random_email()
    client.post("/api/v1/auth/register", json={
        "name": "Load Tester",
        "email": email,
        "password": PASSWORD,
    })
    resp = client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
    if resp.status_code == 200:
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return {}


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print(f"Racing for court {COURT_ID} on {RACE_DATE} {RACE_SLOT['start_time']}")
    print("=" * 60)


class ConcurrencyUser(HttpUser):
    """
    TEST 1: Concurrency - many users, one court hour

    Run: locust -f locustfile.py --tags concurrency -u 100 -r 50 --run-time 30s

    After test, verify:
      SELECT COUNT(*) FROM bookings
      WHERE court_id = X AND booking_date = '<RACE_DATE>'
        AND start_time = '18:00' AND status IN ('PENDING', 'CONFIRMED');
    Should be exactly 1
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        self.headers = register_and_login(self.client)

    @tag("concurrency")
    @task
    def book_same_hour(self):
        if not self.headers:
            return

        with self.client.post("/api/v1/bookings/",
            json={"court_id": COURT_ID, "booking_date": RACE_DATE, **RACE_SLOT},
            headers=self.headers,
            catch_response=True
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            elif resp.status_code == 400:
                resp.success()  # Expected: already taken
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - availability cache

    Run twice:
      1. With Redis: locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s
      2. Without Redis: REDIS_ENABLED=false on the API, run again
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def available_times(self):
        slot_date = (date.today() + timedelta(days=random.randint(0, 6))).isoformat()
        self.client.get(
            f"/api/v1/bookings/available-times?court_id={COURT_ID}&date={slot_date}",
            name="/api/v1/bookings/available-times [cached]",
        )

    @tag("throughput", "read")
    @task(3)
    def court_bookings(self):
        self.client.get(f"/api/v1/bookings/court/{COURT_ID}", name="/api/v1/bookings/court/{id}")

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.headers = register_and_login(self.client)

    def _expect(self, payload, allowed, headers=None):
        with self.client.post("/api/v1/bookings/",
            json=payload,
            headers=self.headers if headers is None else headers,
            catch_response=True
        ) as resp:
            if resp.status_code in allowed:
                resp.success()
            else:
                resp.failure(f"Expected {allowed}, got {resp.status_code}")

    @tag("edge")
    @task
    def unknown_court(self):
        self._expect(
            {"court_id": 999999, "booking_date": RACE_DATE, "start_time": "10:00", "end_time": "11:00"},
            [404],
        )

    @tag("edge")
    @task
    def reversed_times(self):
        self._expect(
            {"court_id": COURT_ID, "booking_date": RACE_DATE, "start_time": "12:00", "end_time": "10:00"},
            [400],
        )

    @tag("edge")
    @task
    def outside_hours(self):
        self._expect(
            {"court_id": COURT_ID, "booking_date": RACE_DATE, "start_time": "05:00", "end_time": "07:00"},
            [400],
        )

    @tag("edge")
    @task
    def past_date(self):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        self._expect(
            {"court_id": COURT_ID, "booking_date": yesterday, "start_time": "10:00", "end_time": "11:00"},
            [400],
        )

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/v1/bookings/",
            data="not json at all",
            headers=self.headers,
            catch_response=True
        ) as resp:
            if resp.status_code in [400, 422]:
                resp.success()
            else:
                resp.failure(f"Expected 400/422, got {resp.status_code}")

    @tag("edge")
    @task
    def missing_auth(self):
        self._expect(
            {"court_id": COURT_ID, "booking_date": RACE_DATE, "start_time": "10:00", "end_time": "11:00"},
            [401],
            headers={},
        )


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Mostly browsing free slots, some bookings, a few cancellations.
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.headers = register_and_login(self.client)
        self.booking_ids = []

    @task(50)
    def browse_slots(self):
        slot_date = (date.today() + timedelta(days=random.randint(1, 14))).isoformat()
        self.client.get(
            f"/api/v1/bookings/available-times?court_id={COURT_ID}&date={slot_date}",
            name="/api/v1/bookings/available-times",
        )

    @task(10)
    def book_hour(self):
        if not self.headers:
            return
        hour = random.randint(6, 21)
        resp = self.client.post("/api/v1/bookings/",
            json={
                "court_id": COURT_ID,
                "booking_date": (date.today() + timedelta(days=random.randint(1, 14))).isoformat(),
                "start_time": f"{hour:02d}:00",
                "end_time": f"{hour + 1:02d}:00",
            },
            headers=self.headers,
            name="/api/v1/bookings/ [random hour]")
        if resp.status_code == 201:
            self.booking_ids.append(resp.json()["id"])

    @task(2)
    def cancel_one(self):
        if self.booking_ids and self.headers:
            booking_id = self.booking_ids.pop()
            self.client.patch(f"/api/v1/bookings/{booking_id}/cancel",
                headers=self.headers,
                name="/api/v1/bookings/{id}/cancel")
