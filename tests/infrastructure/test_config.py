"""Tests for environment-driven settings."""

import pytest

from orderflow.application.show_order import MissingProductPolicy
from orderflow.infrastructure.config import Settings


class TestSettingsFromEnv:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.database_url.startswith("sqlite:///")
        assert settings.database_url.endswith("orders.db")
        assert settings.catalog_routing_key == "validate_product"
        assert settings.catalog_timeout == 5.0
        assert settings.catalog_retries == 0
        assert settings.missing_product_policy is MissingProductPolicy.PLACEHOLDER
        assert settings.log_json is False

    def test_overrides(self):
        settings = Settings.from_env({
            "ORDERS_DATABASE_URL": "postgresql://orders@db/orders",
            "ORDERS_RABBITMQ_URL": "amqp://broker",
            "ORDERS_QUEUE": "orders.rpc",
            "ORDERS_CATALOG_TIMEOUT": "2.5",
            "ORDERS_CATALOG_RETRIES": "3",
            "ORDERS_MISSING_PRODUCT_POLICY": "FAIL",
            "ORDERS_LOG_LEVEL": "debug",
            "ORDERS_LOG_JSON": "yes",
        })
        assert settings.database_url == "postgresql://orders@db/orders"
        assert settings.rabbitmq_url == "amqp://broker"
        assert settings.orders_queue == "orders.rpc"
        assert settings.catalog_timeout == 2.5
        assert settings.catalog_retries == 3
        assert settings.missing_product_policy is MissingProductPolicy.FAIL
        assert settings.log_level == "DEBUG"
        assert settings.log_json is True

    @pytest.mark.parametrize("env", [
        {"ORDERS_CATALOG_TIMEOUT": "0"},
        {"ORDERS_CATALOG_RETRIES": "-1"},
        {"ORDERS_CATALOG_RETRIES": "many"},
        {"ORDERS_MISSING_PRODUCT_POLICY": "ignore"},
        {"ORDERS_LOG_JSON": "maybe"},
    ])
    def test_invalid_values_rejected(self, env):
        with pytest.raises(ValueError):
            Settings.from_env(env)
