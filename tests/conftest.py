import logging
import os

import pytest
from _pytest.monkeypatch import MonkeyPatch

from .fixtures import *

_LEDGER_ENV = ("RPC_URL", "PRIVATE_KEY", "CONTRACT_ADDRESS")


@pytest.fixture(scope="session", autouse=True)
def isolate_environment(monkeypatch_session: MonkeyPatch) -> None:
    """
    Keep a developer's own ledger/advisor settings from leaking into tests
    """
    for key in list(os.environ):
        if key in _LEDGER_ENV or (
            key.upper().startswith("TASKCHAIN_") and not key.upper().startswith("TASKCHAIN_TEST_")
        ):
            monkeypatch_session.delenv(key)


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    # tests against a live node only run when one is configured
    if not os.environ.get("TASKCHAIN_TEST_RPC_URL"):
        skip_ledger = pytest.mark.skip(reason="TASKCHAIN_TEST_RPC_URL not set")
        for item in items:
            if item.get_closest_marker("ledger"):
                item.add_marker(skip_ledger)


@pytest.fixture(autouse=True)
def propagate_logs(monkeypatch: MonkeyPatch) -> None:
    """
    The taskchain root logger doesn't propagate, let records reach ``caplog``
    """
    monkeypatch.setattr(logging.getLogger("taskchain"), "propagate", True)
