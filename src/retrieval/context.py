"""Context block and KPI assembly from ranked projects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .models import NOT_AVAILABLE, ProjectRecord, field_or

NO_DOCUMENTS = "—"


@dataclass(frozen=True)
class Kpis:
    """Locally derived summary of the best-ranked project."""

    status: str
    progress: int | float | None
    docs: int
    last_update: str | None

    def to_payload(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "progress": self.progress,
            "docs": self.docs,
            "lastUpdate": self.last_update,
        }


def _format_progress(progress: int | float | None) -> str:
    if progress is None:
        return NOT_AVAILABLE
    return f"{field_or(progress)}%"


def format_project(record: ProjectRecord, position: int) -> str:
    titles = ", ".join(record.document_titles())
    lines = [
        f"#{position} {record.name}",
        f"Estado: {record.status}",
        f"Avance: {_format_progress(record.progress)}",
        f"Responsable: {field_or(record.responsible_name())}",
        f"Última actualización: {field_or(record.last_update)}",
        f"Documentos: {field_or(titles, NO_DOCUMENTS)}",
        f"Descripción: {record.description}",
    ]
    return "\n".join(lines)


def build_context(records: Sequence[ProjectRecord]) -> str:
    """Digest of ranked projects; the only catalog data ever sent to a generation provider."""
    return "\n\n".join(format_project(record, position) for position, record in enumerate(records, 1))


def build_kpis(record: ProjectRecord | None) -> Kpis | None:
    if record is None:
        return None
    return Kpis(
        status=record.status,
        progress=record.progress,
        docs=len(record.documents),
        last_update=record.last_update,
    )


__all__ = ["Kpis", "NO_DOCUMENTS", "format_project", "build_context", "build_kpis"]
