"""Supabase-backed persistence of the final validation record."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from restock_validation.domain.sections import SLOT_KEYS, SectionSlot
from restock_validation.domain.session import SessionState
from restock_validation.services.session import SubmissionRepository


@dataclass
class SupabaseSubmissionRepository(SubmissionRepository):
    """Writes section rows and closes the validation record."""

    client: Client
    validations_table: str = "validacoes"
    sections_table: str = "validacao_secoes"

    def submit(self, user_id: str, submission_id: str, session: SessionState) -> None:
        """Persist every section and mark the validation completed."""
        rows = []
        for slot in SectionSlot:
            record = session.section(slot)
            rows.append(
                {
                    "validacao_id": submission_id,
                    "secao": SLOT_KEYS[slot].value,
                    "pulada": record.skipped if record else False,
                    "completa": record.is_complete if record else False,
                    "lotes": (
                        [lot.to_dict() for lot in record.lots] if record else []
                    ),
                    "foto_final": record.final_photo if record else None,
                    "observacao": record.observation if record else None,
                }
            )
        response = self.client.table(self.sections_table).insert(rows).execute()
        if not response.data:
            raise RuntimeError("Failed to store validation sections")

        self.client.table(self.validations_table).update(
            {
                "promotor_id": user_id,
                "usuario": session.username,
                "cidade": session.city,
                "loja": session.store,
                "status": "completed",
                "finalizado_em": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", submission_id).execute()
