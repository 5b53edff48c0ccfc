"""Supabase-backed promoter directory."""

from dataclasses import dataclass

from supabase import Client

from restock_validation.domain.identity import Promoter
from restock_validation.services.session import IdentityRepository


@dataclass
class SupabaseIdentityRepository(IdentityRepository):
    """Supabase implementation for promoter lookups."""

    client: Client
    table: str = "promotores"

    def get_promoter(self, token: str) -> Promoter | None:
        """Return the promoter whose ID matches the login token."""
        response = (
            self.client.table(self.table)
            .select('"ID", "Nome"')
            .eq("ID", token)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Promoter(id=str(row["ID"]), name=row.get("Nome"))
