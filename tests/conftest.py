"""Shared fixtures for Spend Sight tests."""

import pytest

SAMPLE_RECEIPT = """\
COSTCO WHOLESALE
123 Main St
(416) 555-0199
02/24/2026 14:32
Bananas 1.49
Rotisserie Chicken 7.99
Paper Towels 19.99
SUBTOTAL 29.47
HST 1.20
TOTAL $30.67
VISA TEND 30.67
CHANGE 0.00
"""


@pytest.fixture
def sample_text():
    return SAMPLE_RECEIPT


@pytest.fixture(autouse=True)
def _no_db_env(monkeypatch):
    monkeypatch.delenv("SPEND_SIGHT_DB", raising=False)
