from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from ...domain import CalendarDate, CalendarEvent
from ..supabase import SupabaseGateway


@dataclass(slots=True)
class EventRepository:
    """Synchronous access to the events table of the signed-in user.

    Rows carry a ``date_time`` column (``YYYYMMDDHHMM``) that range queries
    filter on lexicographically.
    """

    gateway: SupabaseGateway
    table_name: str

    def fetch_range(self, start: CalendarDate, end: CalendarDate) -> List[CalendarEvent]:
        response = (
            self.gateway.table(self.table_name)
            .select("*")
            .eq("user_id", self.gateway.user_id)
            .gte("date_time", f"{start.to_string()}0000")
            .lte("date_time", f"{end.to_string()}2359")
            .execute()
        )
        return [CalendarEvent.from_record(record) for record in response.data or []]

    def insert(self, event: CalendarEvent) -> str:
        payload = event.to_record(user_id=self.gateway.user_id)
        payload.pop("id", None)
        response = self.gateway.table(self.table_name).insert(payload).execute()
        rows = response.data or []
        if not rows or not rows[0].get("id"):
            raise LookupError("The events table did not return an id for the new event.")
        return str(rows[0]["id"])

    def update(self, event_id: str, record: Dict[str, Any]) -> bool:
        response = (
            self.gateway.table(self.table_name)
            .update(record)
            .eq("id", event_id)
            .eq("user_id", self.gateway.user_id)
            .execute()
        )
        return bool(response.data)

    def delete(self, event_id: str) -> bool:
        response = (
            self.gateway.table(self.table_name)
            .delete()
            .eq("id", event_id)
            .eq("user_id", self.gateway.user_id)
            .execute()
        )
        return bool(response.data)
