"""Messaging load test scenarios.

Stateful SequentialTaskSet journeys against ``POST /messaging``. Steps
execute in order; each depends on the previous step succeeding.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    device_token,
    message_payload,
    register_payload,
    topic_payload,
    unregister_payload,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import DeviceState


class _RelayJourney(SequentialTaskSet):
    def on_start(self):
        self.state = DeviceState(token=device_token())

    def _post(self, payload, name, expected=200):
        with self.client.post("/messaging", json=payload, catch_response=True, name=name) as resp:
            if resp.status_code != expected:
                resp.failure(f"{name} failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()
                return None
            resp.success()
            return resp.json()


class DeviceLifecycleJourney(_RelayJourney):
    """Register -> Re-register -> Message -> Unregister."""

    @task
    def register(self):
        body = self._post(register_payload(self.state.token), "register (new)")
        if body:
            self.state.user_id = body["userId"]
            self.state.registrations += 1

    @task
    def reregister(self):
        body = self._post(register_payload(self.state.token), "register (existing)")
        if body and body["userId"] != self.state.user_id:
            self.interrupt()

    @task
    def message(self):
        if self._post(message_payload(self.state.user_id), "message"):
            self.state.messages_sent += 1

    @task
    def unregister(self):
        self._post(unregister_payload(self.state.user_id, self.state.token), "unregister")
        self.interrupt()


class UnknownUserJourney(_RelayJourney):
    """Message a user that never registered; expects 404 with no push."""

    @task
    def message_unknown(self):
        self._post(message_payload("lt-missing-user"), "message (unknown)", expected=404)
        self.interrupt()


class TopicBroadcastJourney(_RelayJourney):
    @task
    def broadcast(self):
        self._post(topic_payload(), "topic")
        self.interrupt()


class RelayUser(HttpUser):
    """Device traffic dominated by registrations, with occasional broadcasts."""

    wait_time = between(0.5, 3.0)
    tasks = {
        DeviceLifecycleJourney: 8,
        TopicBroadcastJourney: 2,
        UnknownUserJourney: 1,
    }
