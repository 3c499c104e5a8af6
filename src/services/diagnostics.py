import logging
from typing import Dict, Any
from ..core.events import EventBus, DIAGNOSTICS_COMPLETED
from ..db.connection import Database
from ..db.models import TicketStatus
from .persistence import TicketStore

logger = logging.getLogger(__name__)


class DiagnosticsService:
    """Collects and emits runtime diagnostics (store accessibility, ticket counts)."""
    def __init__(self, bus: EventBus, db: Database, store: TicketStore):
        self.bus = bus
        self.db = db
        self.store = store
        self.last_results: Dict[str, Any] | None = None  # cached latest diagnostics snapshot

    async def run_startup(self, version: str = "0.1.0"):
        results = self.collect()
        logger.info("Startup diagnostics: %s", results)
        payload: Dict[str, Any] = {"version": version, "results": results}
        await self.bus.Emit(DIAGNOSTICS_COMPLETED, payload, {})

    def collect(self) -> Dict[str, Any]:
        """Collect a synchronous snapshot of diagnostics information.

        A failing section is reported under "<section>_error" instead of raising.
        """
        results: Dict[str, Any] = {}
        try:
            self.db.Ping()
            results["database"] = {"status": "ok"}
        except Exception as e:
            results["database"] = {"status": "error", "error": str(e)}
            self.last_results = results
            return results

        try:
            by_status = self.store.count_by_status()
            counts: Dict[str, int] = {s.value: by_status.get(s.value, 0) for s in TicketStatus if s is not TicketStatus.NEW}
            counts["total"] = sum(counts.values())
            results["tickets"] = counts
        except Exception as e:
            results["tickets_error"] = str(e)

        self.last_results = results
        return results
