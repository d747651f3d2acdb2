"""
conftest.py: shared fixtures.

Strategy:
- The engine tests need no I/O; they build records with helpers from
  ``factories``.
- HTTP tests run the real FastAPI app over ASGITransport with the record
  source dependency overridden by an in-memory FakeRecordSource, so no
  database is required.
"""

from __future__ import annotations

from datetime import date, time

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from factories import POLICY, FakeRecordSource, checkin, employee, leave, overtime
from workforce_analytics.api.analytics import get_record_source
from workforce_analytics.main import app
from workforce_analytics.schemas.records import RawRecords

# Wednesday
REPORT_DAY = date(2024, 1, 10)


@pytest.fixture
def policy():
    return POLICY


@pytest.fixture
def roster() -> list:
    """Three daily-wage and seven monthly employees."""
    daily = [employee(f"D{i}", "daily-wage", department="Floor") for i in range(1, 4)]
    monthly = [employee(f"M{i}", "monthly", department="Office") for i in range(1, 8)]
    return daily + monthly


@pytest.fixture
def sample_raw(roster: list) -> RawRecords:
    """One day of mixed records around REPORT_DAY."""
    return RawRecords(
        employees=roster,
        attendance=[
            checkin("D1", REPORT_DAY, 8, 55, record_id="a1"),
            checkin("D2", REPORT_DAY, 9, 30, status="late", record_id="a2"),
            checkin("M1", REPORT_DAY, 9, 45, record_id="a3"),
            checkin("M2", REPORT_DAY, 8, 30, record_id="a4"),
        ],
        overtime=[
            overtime("D1", REPORT_DAY, time(18), time(20), record_id="o1"),
            overtime("M1", REPORT_DAY, time(18), time(19), record_id="o2"),
        ],
        leave=[
            leave("D3", "sick", REPORT_DAY),
            leave("M3", "vacation", REPORT_DAY),
        ],
    )


@pytest.fixture
def fake_source(sample_raw: RawRecords) -> FakeRecordSource:
    return FakeRecordSource(sample_raw)


@pytest_asyncio.fixture
async def client(fake_source: FakeRecordSource) -> AsyncClient:
    """HTTPX async client against the app, reading from ``fake_source``."""
    app.dependency_overrides[get_record_source] = lambda: fake_source
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_record_source, None)
