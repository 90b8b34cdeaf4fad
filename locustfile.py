# locustfile.py
import random
import uuid

from locust import HttpUser, between, task


class GatewayUser(HttpUser):
    wait_time = between(0.1, 0.5)

    def _headers(self):
        return {"x-request-id": uuid.uuid4().hex}

    @task(9)
    def aggregate(self):
        self.client.get("/api/aggregate", headers=self._headers(), timeout=15)

    @task(1)
    def aggregate_slow(self):
        ms = random.choice((100, 500, 2000))
        self.client.get("/api/aggregate/slow", params={"ms": ms}, headers=self._headers(),
                        name="/api/aggregate/slow", timeout=15)
