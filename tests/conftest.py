"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient
from expense_capture.api.main import create_app
from expense_capture.domain.models import ExpenseRecord


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def today() -> date:
    return date(2026, 1, 31)


@pytest.fixture
def bulk_sms_text() -> str:
    """Two bank messages pasted with a blank line between them"""
    return (
        "Rs.1,200.50 spent at Amazon on 05/03/24\n"
        "\n"
        "Your account credited with Rs.3000 from John on 06Mar24"
    )


@pytest.fixture
def evening_swiggy_history() -> list[ExpenseRecord]:
    """Six Swiggy dinners ordered around 8pm, plus unrelated records"""
    base = datetime(2026, 1, 1, 20, 5)
    history = [
        ExpenseRecord(
            amount=Decimal(300 + i * 20),
            category="Food",
            type="expense",
            date=(base + timedelta(days=i)).date(),
            merchant="Swiggy",
            created_at=base + timedelta(days=i, minutes=i * 3),
        )
        for i in range(6)
    ]

    # Salary is income and must never become a habit
    history.append(
        ExpenseRecord(
            amount=Decimal(50000),
            category="Salary",
            type="income",
            date=date(2026, 1, 1),
            merchant="Employer",
            created_at=datetime(2026, 1, 1, 20, 0),
        )
    )

    # One-off morning cab ride
    history.append(
        ExpenseRecord(
            amount=Decimal(180),
            category="Transport",
            type="expense",
            date=date(2026, 1, 3),
            merchant="Uber",
            created_at=datetime(2026, 1, 3, 8, 30),
        )
    )

    return history
