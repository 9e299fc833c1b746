"""Tests for settings and the store/gateway adapter registries."""

from unittest.mock import MagicMock

import messaging.gateway as gateway_registry
import messaging.store as store_registry
import pytest
from messaging.config import get_settings, reset_settings
from messaging.gateway import get_push_gateway, reset_push_gateway
from messaging.gateway.fake_push import FakePushGateway
from messaging.gateway.fcm_push import FcmPushGateway
from messaging.store import get_session_store, reset_session_store
from messaging.store.dynamodb_store import DynamoDBSessionStore
from messaging.store.fake_store import FakeSessionStore
from messaging.store.repository_store import RepositorySessionStore


class TestSettings:
    def test_defaults(self):
        settings = get_settings()
        assert settings.profile_topic == "profile-update"
        assert settings.table_name == "find-face-sessions"
        assert settings.token_index_name == "token-index"
        assert settings.session_store == "repository"
        assert settings.push_gateway == "fake"
        assert settings.test_e2e is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PROFILE_TOPIC", "presence")
        monkeypatch.setenv("TEST_E2E", "true")
        monkeypatch.setenv("HTTP_TIMEOUT", "2.5")
        reset_settings()

        settings = get_settings()
        assert settings.profile_topic == "presence"
        assert settings.test_e2e is True
        assert settings.http_timeout == 2.5

    def test_server_key_is_secret(self, monkeypatch):
        monkeypatch.setenv("FCM_SERVER_KEY", "AAAA-key")
        reset_settings()

        settings = get_settings()
        assert "AAAA-key" not in repr(settings)
        assert settings.fcm_server_key.get_secret_value() == "AAAA-key"

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()

    @pytest.mark.parametrize("environment", ["test", "development", "Development"])
    def test_local_environments(self, monkeypatch, environment):
        monkeypatch.setenv("ENVIRONMENT", environment)
        reset_settings()
        assert get_settings().is_local() is True

    def test_deployed_environment_is_not_local(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        reset_settings()
        assert get_settings().is_local() is False


class TestSessionStoreRegistry:
    def test_default_is_repository(self):
        assert isinstance(get_session_store(), RepositorySessionStore)

    def test_returns_singleton(self):
        assert get_session_store() is get_session_store()

    def test_fake(self, monkeypatch):
        monkeypatch.setenv("SESSION_STORE", "fake")
        reset_settings()
        assert isinstance(get_session_store(), FakeSessionStore)

    def test_dynamodb(self, monkeypatch):
        monkeypatch.setenv("SESSION_STORE", "dynamodb")
        monkeypatch.setenv("TABLE_NAME", "sessions-test")
        reset_settings()

        store = get_session_store()
        assert isinstance(store, DynamoDBSessionStore)
        assert store._table_name == "sessions-test"

    def test_unknown_store_raises(self, monkeypatch):
        monkeypatch.setenv("SESSION_STORE", "carrier-pigeon")
        reset_settings()
        with pytest.raises(ValueError, match="Unknown session store"):
            get_session_store()

    def test_reset_clears_singleton(self):
        first = get_session_store()
        reset_session_store()
        assert get_session_store() is not first


class TestPushGatewayRegistry:
    def test_default_is_fake(self):
        assert isinstance(get_push_gateway(), FakePushGateway)

    def test_fcm(self, monkeypatch):
        monkeypatch.setenv("PUSH_GATEWAY", "fcm")
        monkeypatch.setenv("FCM_SERVER_KEY", "AAAA-key")
        reset_settings()

        gateway = get_push_gateway()
        assert isinstance(gateway, FcmPushGateway)
        assert gateway._headers["Authorization"] == "key=AAAA-key"

    def test_unknown_gateway_raises(self, monkeypatch):
        monkeypatch.setenv("PUSH_GATEWAY", "pager")
        reset_settings()
        with pytest.raises(ValueError, match="Unknown push gateway"):
            get_push_gateway()

    def test_reset_clears_singleton(self):
        first = get_push_gateway()
        reset_push_gateway()
        assert get_push_gateway() is not first


class TestInMemoryAdapterWarnings:
    @pytest.fixture()
    def store_logger(self, monkeypatch):
        logger = MagicMock()
        monkeypatch.setattr(store_registry, "logger", logger)
        return logger

    @pytest.fixture()
    def gateway_logger(self, monkeypatch):
        logger = MagicMock()
        monkeypatch.setattr(gateway_registry, "logger", logger)
        return logger

    def test_fake_gateway_outside_local_environments_warns(self, monkeypatch, gateway_logger):
        monkeypatch.setenv("ENVIRONMENT", "production")
        reset_settings()

        get_push_gateway()

        gateway_logger.warning.assert_called_once()
        assert gateway_logger.warning.call_args.kwargs["environment"] == "production"

    def test_fake_gateway_in_test_environment_is_silent(self, monkeypatch, gateway_logger):
        monkeypatch.setenv("ENVIRONMENT", "test")
        reset_settings()

        get_push_gateway()

        gateway_logger.warning.assert_not_called()

    def test_fcm_gateway_is_silent(self, monkeypatch, gateway_logger):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("PUSH_GATEWAY", "fcm")
        reset_settings()

        get_push_gateway()

        gateway_logger.warning.assert_not_called()

    def test_memory_repository_outside_local_environments_warns(self, monkeypatch, store_logger):
        monkeypatch.setenv("ENVIRONMENT", "staging")
        reset_settings()

        get_session_store()

        store_logger.warning.assert_called_once()

    def test_fake_store_outside_local_environments_warns(self, monkeypatch, store_logger):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("SESSION_STORE", "fake")
        reset_settings()

        get_session_store()

        store_logger.warning.assert_called_once()

    def test_dynamodb_store_is_silent(self, monkeypatch, store_logger):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("SESSION_STORE", "dynamodb")
        reset_settings()

        get_session_store()

        store_logger.warning.assert_not_called()
