"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags calendar     # Hammer the cached calendar
  locust -f locustfile.py --tags intake       # Concurrent requests for the same date
  locust -f locustfile.py --tags edge         # Test bad input
  locust -f locustfile.py                     # All tests

Staff scenarios log in with STAFF_EMAIL / STAFF_PASSWORD (an admin or
bookingmanager account that already exists).
"""

import os
import random
import string
from datetime import date, timedelta

from locust import HttpUser, task, between, tag, events

STAFF_EMAIL = os.environ.get("STAFF_EMAIL", "admin@example.com")
STAFF_PASSWORD = os.environ.get("STAFF_PASSWORD", "adminpassword")

# One date every IntakeUser fights over
CONTESTED_DATE = (date.today() + timedelta(days=120)).isoformat()
SUBMITTED_IDS = []


def random_email():
    return f"load_{random.randint(10000, 99999)}@test.com"


def random_username():
    return "u_" + "".join(random.choices(string.ascii_lowercase, k=8))


def random_future_date():
    return (date.today() + timedelta(days=random.randint(1, 365))).isoformat()


def booking_form(event_date=None, **overrides):
    form = {
        "firstName": "Load",
        "surname": random.choice(["Patel", "Shah", "Desai"]),
        "email": random_email(),
        "phone": "".join(random.choices(string.digits, k=10)),
        "eventType": random.choice(["Wedding", "Birthday", "Engagement"]),
        "date": event_date or random_future_date(),
        "villageName": random.choice(["Vadodara", "Surat", "Anand"]),
        "guestCount": random.randint(50, 900),
        "eventDocument": "http://localhost:8000/uploads/documents/load.pdf",
        "documentType": "Other",
    }
    form.update(overrides)
    return form


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print(f"Contested date for intake scenario: {CONTESTED_DATE}")
    print("=" * 60)


class IntakeUser(HttpUser):
    """
    TEST 1: Concurrent intake for one date

    Run: locust -f locustfile.py --tags intake -u 100 -r 50 --run-time 30s

    The first request wins; the rest should get 409 once it is Pending.
    After test, verify:
      SELECT COUNT(*) FROM bookings WHERE kind = 'general' AND event_date = '<date>';
    """
    wait_time = between(0, 0.1)

    @tag("intake")
    @task
    def request_contested_date(self):
        with self.client.post("/api/bookings/submit",
            json=booking_form(CONTESTED_DATE),
            catch_response=True,
            name="/api/bookings/submit [contested]",
        ) as resp:
            if resp.status_code in (201, 409):
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class CalendarUser(HttpUser):
    """
    TEST 2: Throughput - Cache effectiveness

    Run twice:
      1. With Redis: locust -f locustfile.py --tags calendar -u 100 -r 20 --run-time 60s
      2. Without Redis: REDIS_ENABLED=false, run again

    Compare avg response time, requests/sec, P95/P99 latency.
    """
    wait_time = between(0.1, 0.5)

    @tag("calendar", "read")
    @task(10)
    def booked_dates(self):
        self.client.get("/api/bookings/booked-dates", name="/api/bookings/booked-dates [cached]")

    @tag("calendar", "read")
    @task(3)
    def form_status(self):
        self.client.get("/api/forms/public/status")

    @tag("calendar")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def too_many_guests(self):
        with self.client.post("/api/bookings/submit",
            json=booking_form(guestCount=1500), catch_response=True) as resp:
            self._expect(resp, [422])

    @tag("edge")
    @task
    def bad_phone(self):
        with self.client.post("/api/bookings/submit",
            json=booking_form(phone="12345"), catch_response=True) as resp:
            self._expect(resp, [422])

    @tag("edge")
    @task
    def past_date(self):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        with self.client.post("/api/bookings/submit",
            json=booking_form(yesterday), catch_response=True) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/bookings/submit",
            data="not json at all", catch_response=True) as resp:
            self._expect(resp, [400, 422])

    @tag("edge")
    @task
    def missing_auth(self):
        with self.client.get("/api/bookings/my", catch_response=True) as resp:
            self._expect(resp, [401])

    @tag("edge")
    @task
    def approve_unknown_booking_without_staff_role(self):
        with self.client.put("/api/bookings/approve/999999", catch_response=True) as resp:
            self._expect(resp, [401])


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Simulates real traffic:
      - Mostly visitors checking the calendar and forms
      - Some registered users submitting and checking their requests
      - A few staff approving, rejecting and viewing the dashboard
    """
    wait_time = between(1, 3)

    def on_start(self):
        email = random_email()
        self.client.post("/api/auth/register", json={
            "email": email,
            "username": random_username(),
            "password": "test12345",
        })
        resp = self.client.post("/api/auth/login", json={"email": email, "password": "test12345"})
        self.headers = {"Authorization": f"Bearer {resp.json()['access_token']}"} if resp.status_code == 200 else {}

        resp = self.client.post("/api/auth/login", json={"email": STAFF_EMAIL, "password": STAFF_PASSWORD})
        self.staff_headers = (
            {"Authorization": f"Bearer {resp.json()['access_token']}"} if resp.status_code == 200 else {}
        )

    @task(40)
    def browse_calendar(self):
        self.client.get("/api/bookings/booked-dates")

    @task(10)
    def check_forms(self):
        self.client.get("/api/forms/check-form-visibility/registrationForm", name="/api/forms/check-form-visibility/{name}")

    @task(10)
    def submit_booking(self):
        with self.client.post("/api/bookings/submit",
            json=booking_form(), headers=self.headers, catch_response=True) as resp:
            if resp.status_code == 201:
                SUBMITTED_IDS.append(resp.json()["booking"]["id"])
                resp.success()
            elif resp.status_code == 409:
                resp.success()  # Date already taken

    @task(5)
    def my_bookings(self):
        if self.headers:
            self.client.get("/api/bookings/my", headers=self.headers)

    @task(3)
    def staff_review(self):
        if not self.staff_headers or not SUBMITTED_IDS:
            return
        booking_id = SUBMITTED_IDS.pop()
        if random.random() < 0.8:
            self.client.put(f"/api/bookings/approve/{booking_id}",
                headers=self.staff_headers, name="/api/bookings/approve/{id}")
        else:
            self.client.put(f"/api/bookings/reject/{booking_id}",
                json={"reason": "Load test rejection"},
                headers=self.staff_headers, name="/api/bookings/reject/{id}")

    @task(1)
    def dashboard(self):
        if self.staff_headers:
            self.client.get("/api/admin/dashboard", headers=self.staff_headers)
