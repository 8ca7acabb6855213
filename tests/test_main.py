"""Application wiring."""

from __future__ import annotations

import logging

from glamping_inventory.core.log import LOGGER_NAME, configure_logging
from glamping_inventory.main import app


def test_inventory_routes_are_mounted():
    paths = {route.path for route in app.routes}

    assert "/inventory/transactions" in paths
    assert "/inventory/{product_id}/transactions" in paths
    assert "/inventory/{product_id}/stock" in paths
    assert "/inventory/stock" in paths


def test_configure_logging_is_idempotent():
    first = configure_logging()
    second = configure_logging()

    assert first is second is logging.getLogger(LOGGER_NAME)
    assert len(first.handlers) == 1
