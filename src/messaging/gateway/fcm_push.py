"""Firebase Cloud Messaging gateway (legacy HTTP API).

Token and topic sends go to ``/fcm/send``; topic subscriptions go to the
Instance ID service (``/iid/v1/{token}/rel/topics/{topic}``). Every request
is authorized with the server key. Errors are reported in the result dict,
never raised.
"""

import httpx
import structlog

from messaging.gateway.port import PushGatewayPort, build_data

logger = structlog.get_logger(__name__)


class FcmPushGateway(PushGatewayPort):
    def __init__(
        self,
        server_key: str,
        send_url: str = "https://fcm.googleapis.com/fcm/send",
        iid_url: str = "https://iid.googleapis.com/iid/v1",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.send_url = send_url
        self.iid_url = iid_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"key={server_key}",
        }

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, operation: str, url: str, body: dict) -> dict:
        try:
            response = await self._client.post(url, json=body, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"{operation} failed",
                status_code=e.response.status_code,
                body=e.response.text[:500],
            )
            return {
                "message_id": None,
                "status": "failed",
                "error": f"HTTP {e.response.status_code}: {e.response.text[:200]}",
            }
        except httpx.HTTPError as e:
            logger.warning(f"{operation} failed", error=str(e))
            return {"message_id": None, "status": "failed", "error": str(e) or type(e).__name__}

        try:
            data = response.json()
        except ValueError:
            data = {}

        logger.info(f"{operation} response", status_code=response.status_code, response=data)
        return {"message_id": data.get("message_id"), "status": "sent", "response": data}

    async def send_to_token(self, token: str, payload: dict | None) -> dict:
        result = await self._post(
            "send_to_token",
            self.send_url,
            {"registration_ids": [token], "data": build_data(payload)},
        )
        if result["status"] != "sent":
            return result

        # Multicast responses report per-token errors with a 200 status
        response = result.get("response") or {}
        if response.get("failure", 0) >= 1:
            errors = [r.get("error") for r in response.get("results", []) if r.get("error")]
            return {
                "message_id": None,
                "status": "failed",
                "error": errors[0] if errors else "Push delivery failed",
                "response": response,
            }

        results = response.get("results") or [{}]
        result["message_id"] = results[0].get("message_id")
        return result

    async def send_to_topic(self, topic: str, payload: dict | None) -> dict:
        return await self._post(
            "send_to_topic",
            self.send_url,
            {"data": build_data(payload), "to": f"/topics/{topic}"},
        )

    async def subscribe_token_to_topic(self, token: str, topic: str) -> dict:
        return await self._post(
            "subscribe_token_to_topic",
            f"{self.iid_url}/{token}/rel/topics/{topic}",
            {},
        )
