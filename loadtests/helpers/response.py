"""Response error extraction for load test observability.

Handles two response shapes:

- Relay errors (400/404/409/500): {"ok": false, "error": "msg"}
- Anything else: raw text, truncated
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response."""
    try:
        body = response.json()
    except Exception:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and "error" in body:
        return str(body["error"])

    return str(body)[:300]
