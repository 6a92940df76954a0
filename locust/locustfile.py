"""
Locust Load Test Suite

Run scenarios:
  locust -f locust/locustfile.py --tags browse    # Anonymous artist browsing (cache path)
  locust -f locust/locustfile.py --tags booking   # Signup, login, book, list bookings
  locust -f locust/locustfile.py --tags edge      # Bad input and auth failures
  locust -f locust/locustfile.py                  # All scenarios

Bookings have no capacity limit, so after a booking run every request that
returned 200 should have produced a row:
  SELECT COUNT(*) FROM bookings WHERE event_id = X;
"""

import random
import string
from datetime import datetime, timezone, timedelta

from locust import HttpUser, task, between, tag


def random_email():
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=10))
    return f"load_{suffix}@test.com"


def future_date(days: int = 30) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


class BrowsingUser(HttpUser):
    """Anonymous clients listing and opening artists."""

    wait_time = between(0.1, 0.5)

    @tag("browse")
    @task(5)
    def list_artists(self):
        self.client.get("/api/artists")

    @tag("browse")
    @task(1)
    def get_artist(self):
        artist_id = random.randint(1, 50)
        with self.client.get(f"/api/artists/{artist_id}", name="/api/artists/[id]", catch_response=True) as resp:
            # Unknown ids answer 400 with isSuccess=false, which is expected here
            if resp.status_code in (200, 400):
                resp.success()


class BookingUser(HttpUser):
    """Signs up, logs in, creates an artist and event, then books it repeatedly."""

    wait_time = between(0, 0.2)

    def on_start(self):
        self.email = random_email()
        self.password = "load-test-password"
        self.headers = {}
        self.user_id = None
        self.event_id = None

        signup = self.client.post("/api/auth/signup", json={
            "email": self.email,
            "firstName": "Load",
            "lastName": "Tester",
            "password": self.password,
        })
        if signup.status_code == 201:
            self.user_id = signup.json()["content"]["userId"]

        login = self.client.post("/api/auth/login", json={
            "email": self.email,
            "password": self.password,
        })
        if login.status_code != 200:
            return
        self.headers = {"Authorization": f"Bearer {login.json()['content']['token']}"}

        artist = self.client.post("/api/artists", json={"name": f"Artist {self.email}", "genre": "Load"})
        artist_id = artist.json()["content"]["id"] if artist.status_code == 200 else 1

        event = self.client.post(
            "/api/events",
            json={
                "artistId": artist_id,
                "title": "Load Test Show",
                "date": future_date(),
                "venue": "Benchmark Hall",
                "ticketPrice": 10,
            },
            headers=self.headers,
        )
        if event.status_code == 200:
            # responseDescription is "/api/events/{id}"
            self.event_id = int(event.json()["responseDescription"].rsplit("/", 1)[-1])

    @tag("booking")
    @task(5)
    def book(self):
        if not self.event_id or self.user_id is None:
            return
        self.client.post(
            "/api/bookings",
            json={"eventId": self.event_id, "userId": self.user_id},
            headers=self.headers,
        )

    @tag("booking")
    @task(2)
    def list_events(self):
        if self.headers:
            self.client.get("/api/events", headers=self.headers)

    @tag("booking")
    @task(1)
    def my_bookings(self):
        if self.user_id is not None:
            self.client.get(
                f"/api/bookings/{self.user_id}",
                headers=self.headers,
                name="/api/bookings/[userId]",
            )


class EdgeCaseUser(HttpUser):
    """Requests that must fail cleanly with an error envelope."""

    wait_time = between(0.1, 0.3)

    def _expect(self, response, status_codes):
        if response.status_code in status_codes and response.json().get("isSuccess") is False:
            response.success()
        else:
            response.failure(f"unexpected {response.status_code}")

    @tag("edge")
    @task
    def past_event_without_token(self):
        with self.client.post(
            "/api/events",
            json={"artistId": 1, "title": "Past", "date": future_date(-1)},
            catch_response=True,
        ) as resp:
            self._expect(resp, (401,))

    @tag("edge")
    @task
    def empty_artist_name(self):
        with self.client.post("/api/artists", json={"name": ""}, catch_response=True) as resp:
            self._expect(resp, (400,))

    @tag("edge")
    @task
    def bad_login(self):
        with self.client.post(
            "/api/auth/login",
            json={"email": random_email(), "password": "nope"},
            catch_response=True,
        ) as resp:
            self._expect(resp, (401, 429))
