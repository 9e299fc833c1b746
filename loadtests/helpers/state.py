"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared
across users.
"""

from dataclasses import dataclass


@dataclass
class DeviceState:
    """Tracks a single simulated device registration."""

    token: str | None = None
    user_id: str | None = None
    registrations: int = 0
    messages_sent: int = 0
