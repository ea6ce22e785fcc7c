"""Catalog data structures shared by ranking and answer assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_AVAILABLE = "N/D"


@dataclass(frozen=True)
class DocumentRef:
    """A document attached to a project; only the title is used."""

    title: str = ""


@dataclass(frozen=True)
class Responsible:
    name: str | None = None


@dataclass(frozen=True)
class ProjectRecord:
    """Immutable view of one catalog entry."""

    name: str = ""
    description: str = ""
    status: str = ""
    progress: int | float | None = None
    responsible: Responsible | None = None
    last_update: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    documents: tuple[DocumentRef, ...] = field(default_factory=tuple)

    def responsible_name(self) -> str | None:
        if self.responsible is None:
            return None
        return self.responsible.name

    def document_titles(self) -> list[str]:
        return [document.title for document in self.documents if document.title]


@dataclass(frozen=True)
class ScoredMatch:
    record: ProjectRecord
    score: int


class DocumentModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str | None = ""


class ResponsibleModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None


class ProjectModel(BaseModel):
    """Wire shape of a catalog entry as stored in the dataset file."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = ""
    description: str | None = ""
    status: str | None = ""
    progress: int | float | None = None
    responsible: ResponsibleModel | None = None
    last_update: str | None = Field(default=None, alias="lastUpdate")
    tags: list[str] = Field(default_factory=list)
    documents: list[DocumentModel] = Field(default_factory=list)

    @field_validator("tags", "documents", mode="before")
    @classmethod
    def _null_list_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("documents", mode="before")
    @classmethod
    def _documents_without_object_have_no_title(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [item if isinstance(item, dict) else {} for item in value]
        return value

    @field_validator("responsible", mode="before")
    @classmethod
    def _responsible_without_object_has_no_name(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None

    def to_record(self) -> ProjectRecord:
        responsible = Responsible(name=self.responsible.name) if self.responsible else None
        return ProjectRecord(
            name=self.name or "",
            description=self.description or "",
            status=self.status or "",
            progress=self.progress,
            responsible=responsible,
            last_update=self.last_update,
            tags=tuple(self.tags),
            documents=tuple(DocumentRef(title=document.title or "") for document in self.documents),
        )


def field_or(value: Any, fallback: str = NOT_AVAILABLE) -> str:
    """Render an optional field, substituting ``fallback`` for missing or empty values."""
    if value is None or value == "":
        return fallback
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


__all__ = [
    "NOT_AVAILABLE",
    "DocumentRef",
    "Responsible",
    "ProjectRecord",
    "ScoredMatch",
    "DocumentModel",
    "ResponsibleModel",
    "ProjectModel",
    "field_or",
]
