from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest

from hajj_guide.auth.session import Session
from hajj_guide.core.enums import Role
from hajj_guide.database.connection import DatabaseConnection

from fakes import (
    TEST_DB,
    FakeConnection,
    InMemoryAccommodations,
    InMemoryAdmins,
    InMemoryMedical,
    InMemoryPermits,
    InMemoryPilgrims,
    InMemoryTransport,
)


@pytest.fixture
def fake_store():
    """A store handle whose shared connection is a FakeConnection."""
    conn = FakeConnection()
    opened = []

    def connector(**kwargs):
        opened.append(kwargs)
        return conn

    handle = DatabaseConnection(TEST_DB, connector=connector)

    def script(*responses):
        conn.responses.extend(responses)

    return SimpleNamespace(conn=conn, handle=handle, opened=opened, script=script)


@pytest.fixture
def memory():
    """A consistent set of in-memory gateways sharing one pilgrim table."""
    pilgrims = InMemoryPilgrims()
    admins = InMemoryAdmins(pilgrims)
    admins.seed(42, "Sara", "0555555555", "s@x", "p@ss")
    return SimpleNamespace(
        pilgrims=pilgrims,
        admins=admins,
        medical=InMemoryMedical(pilgrims, admins),
        accommodations=InMemoryAccommodations(pilgrims),
        transport=InMemoryTransport(pilgrims),
        permits=InMemoryPermits(pilgrims),
    )


@pytest.fixture
def admin_session():
    return Session(role=Role.ADMIN, id=42, issued_at=datetime(2026, 6, 1, 8, 0, 0))


@pytest.fixture
def pilgrim_session():
    return Session(role=Role.PILGRIM, id=1001, issued_at=datetime(2026, 6, 1, 8, 0, 0))
