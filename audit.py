import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from schemas import AuditEntry, CancerTreatmentOutput, CaseDetails

logger = logging.getLogger("audit")


class AuditEntryNotFound(KeyError):
    pass


class AuditTrail:
    """In-memory record of every assessed case and whether its recommendation was accepted."""

    def __init__(self):
        self._entries: Dict[str, AuditEntry] = {}

    def record(self, case: CaseDetails, output: CancerTreatmentOutput,
               used_files: Optional[List[str]] = None) -> AuditEntry:
        entry = AuditEntry(
            **case.case_fields(),
            id=uuid.uuid4().hex,
            timestamp=datetime.now(timezone.utc),
            recommendation=output.recommendation,
            references=output.references,
            no_recommendation_reason=output.no_recommendation_reason,
            used_guideline_files=list(used_files or []),
        )
        self._entries[entry.id] = entry
        logger.info(f"audit entry {entry.id} recorded for {case.cancer_type} {case.t_stage}/{case.n_stage}")
        return entry

    def get(self, entry_id: str) -> AuditEntry:
        try:
            return self._entries[entry_id]
        except KeyError:
            raise AuditEntryNotFound(entry_id) from None

    def entries(self) -> List[AuditEntry]:
        # insertion order is chronological
        return list(reversed(self._entries.values()))

    def accepted(self) -> List[AuditEntry]:
        return [e for e in self.entries() if e.is_accepted]

    def accept(self, entry_id: str, doctors_note: Optional[str] = None) -> AuditEntry:
        entry = self.get(entry_id)
        note = doctors_note.strip() if doctors_note and doctors_note.strip() else None
        entry.is_accepted = True
        entry.accepted_at = entry.accepted_at or datetime.now(timezone.utc)
        entry.doctors_note = note
        logger.info(f"audit entry {entry_id} accepted")
        return entry

    def clear(self):
        self._entries.clear()

    def __len__(self):
        return len(self._entries)
