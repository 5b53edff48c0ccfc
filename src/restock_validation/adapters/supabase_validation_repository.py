"""Supabase-backed validation record allocation."""

from dataclasses import dataclass

from supabase import Client

from restock_validation.services.session import ValidationRepository


@dataclass
class SupabaseValidationRepository(ValidationRepository):
    """Supabase implementation for validation records."""

    client: Client
    table: str = "validacoes"

    def create_validation(self, user_id: str) -> str | None:
        """Insert a validation row for the promoter and return its id."""
        response = (
            self.client.table(self.table)
            .insert({"promotor_id": user_id, "status": "in_progress"})
            .execute()
        )
        if not response.data:
            return None
        return str(response.data[0]["id"])
