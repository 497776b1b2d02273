"""Supabase-backed key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_counter.services.storage import KeyValueStore

TABLE_NAME = "app_state"


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation storing one row per namespaced key."""

    client: Client
    namespace: str

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        response = (
            self.client.table(TABLE_NAME)
            .select("value")
            .eq("namespace", self.namespace)
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value for a key."""
        self.client.table(TABLE_NAME).upsert(
            {
                "namespace": self.namespace,
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="namespace,key",
        ).execute()

    def delete(self, key: str) -> None:
        """Delete the row for a key."""
        self.client.table(TABLE_NAME).delete().eq("namespace", self.namespace).eq(
            "key", key
        ).execute()
