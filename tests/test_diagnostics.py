from __future__ import annotations

from unittest.mock import Mock

import pytest

from src.core.events import EventBus, Event, DIAGNOSTICS_COMPLETED
from src.db.connection import Database
from src.db.models import TicketStatus
from src.services.diagnostics import DiagnosticsService
from src.services.persistence import TicketStore


def test_collect_reports_ticket_counts(db: Database, store: TicketStore) -> None:
    store.insert(1, 11, "a")
    store.insert(2, 12, "b")
    store.set_status(2, TicketStatus.NOTIFIED)

    snapshot = DiagnosticsService(EventBus(), db, store).collect()

    assert snapshot["database"] == {"status": "ok"}
    assert snapshot["tickets"] == {
        "joined": 1,
        "email_submitted": 0,
        "ticket_ready": 0,
        "notified": 1,
        "total": 2,
    }


def test_collect_reports_unreachable_store(store: TicketStore) -> None:
    broken_db = Mock(spec=Database)
    broken_db.Ping.side_effect = RuntimeError("connection refused")

    service = DiagnosticsService(EventBus(), broken_db, store)
    snapshot = service.collect()

    assert snapshot["database"]["status"] == "error"
    assert "connection refused" in snapshot["database"]["error"]
    assert "tickets" not in snapshot
    assert service.last_results == snapshot


@pytest.mark.asyncio
async def test_run_startup_emits_snapshot(db: Database, store: TicketStore) -> None:
    bus = EventBus()
    seen: list[Event] = []

    async def capture(ev: Event) -> None:
        seen.append(ev)

    bus.Subscribe(DIAGNOSTICS_COMPLETED, capture)
    await DiagnosticsService(bus, db, store).run_startup(version="1.2.3")

    assert len(seen) == 1
    assert seen[0].payload["version"] == "1.2.3"
    assert seen[0].payload["results"]["tickets"]["total"] == 0
