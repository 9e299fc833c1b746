"""Shared BDD fixtures and step definitions for the Messaging domain."""

import asyncio

import pytest
from messaging.dispatch.event import RelayEvent
from messaging.dispatch.result import DispatchFailure, DispatchSuccess
from messaging.session.session import Session
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def relay(dispatcher):
    """Dispatch an event synchronously for step functions."""

    def _relay(event):
        return asyncio.run(dispatcher.dispatch(event))

    return _relay


@pytest.fixture()
def context():
    """Container for results carried between steps."""
    return {"result": None, "registered": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty session store")
def empty_store():
    assert current_domain.repository_for(Session)._dao.query.all().items == []


@given(parsers.cfparse('the device with token "{token}" has registered'))
def registered_device(relay, gateway, context, token):
    context["registered"] = relay(RelayEvent(kind="register", token=token))
    gateway.reset()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the request succeeds")
def request_succeeds(context):
    assert isinstance(context["result"], DispatchSuccess)
    assert context["result"].payload["ok"] is True


@then(parsers.cfparse("the request fails with status {status:d}"))
def request_fails(context, status):
    assert isinstance(context["result"], DispatchFailure)
    assert context["result"].status_code == status


@then(parsers.cfparse("the store holds {count:d} session"))
@then(parsers.cfparse("the store holds {count:d} sessions"))
def store_holds(count):
    assert len(current_domain.repository_for(Session)._dao.query.all().items) == count


@then(parsers.cfparse('a "{code}" broadcast is sent to the profile topic'))
def broadcast_sent(gateway, code):
    assert len(gateway.topic_broadcasts) == 1
    assert gateway.topic_broadcasts[0]["topic"] == "profile-update"
    assert gateway.topic_broadcasts[0]["data"]["code"] == code


@then("no push call is made")
def no_push(gateway):
    assert gateway.call_count() == 0
