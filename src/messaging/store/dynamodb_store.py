"""DynamoDB session store: the ``find-face-sessions`` table.

Sessions are keyed by ``id`` with a ``token-index`` global secondary index
on ``token``. boto3 is blocking, so every call runs in a worker thread.

The boto3 serializer only accepts ``Decimal`` numbers, so records are
converted on the way in and numbers come back as ``int`` or ``float``.
"""

import asyncio
import json
from decimal import Decimal
from typing import Any

import boto3
from boto3.dynamodb.conditions import Key

from messaging.store.port import SessionStorePort


def _decimal_default(value):
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_item(record: dict) -> dict:
    """Record to DynamoDB item: floats become ``Decimal``."""
    return json.loads(json.dumps(record), parse_float=Decimal)


def from_item(item: dict) -> dict:
    """DynamoDB item to record: ``Decimal`` becomes ``int`` or ``float``."""
    return json.loads(json.dumps(item, default=_decimal_default))


class DynamoDBSessionStore(SessionStorePort):
    def __init__(
        self,
        table_name: str,
        *,
        token_index_name: str = "token-index",
        region_name: str | None = None,
        endpoint_url: str | None = None,
        table: Any = None,
    ) -> None:
        self._table_name = table_name
        self._token_index_name = token_index_name
        if table is None:
            resource = boto3.resource(
                "dynamodb",
                region_name=region_name,
                endpoint_url=endpoint_url,
            )
            table = resource.Table(table_name)
        self._table = table

    async def get_by_token(self, token: str) -> dict | None:
        result = await asyncio.to_thread(
            self._table.query,
            IndexName=self._token_index_name,
            KeyConditionExpression=Key("token").eq(token),
            Limit=1,
        )
        items = result.get("Items", [])
        return from_item(items[0]) if items else None

    async def get_by_id(self, session_id: str) -> dict | None:
        result = await asyncio.to_thread(self._table.get_item, Key={"id": session_id})
        item = result.get("Item")
        return from_item(item) if item else None

    async def put(self, record: dict) -> None:
        await asyncio.to_thread(self._table.put_item, Item=to_item(record))

    async def delete(self, session_id: str) -> None:
        await asyncio.to_thread(self._table.delete_item, Key={"id": session_id})
