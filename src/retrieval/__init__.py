"""Catalog loading, lexical ranking and context assembly."""

from .catalog import Catalog, load_catalog
from .context import Kpis, build_context, build_kpis, format_project
from .models import DocumentRef, ProjectModel, ProjectRecord, Responsible, ScoredMatch, field_or
from .ranker import NAME_BONUS, rank, rank_scored, score_project, searchable_text

__all__ = [
    "Catalog",
    "load_catalog",
    "Kpis",
    "build_context",
    "build_kpis",
    "format_project",
    "DocumentRef",
    "ProjectModel",
    "ProjectRecord",
    "Responsible",
    "ScoredMatch",
    "field_or",
    "NAME_BONUS",
    "rank",
    "rank_scored",
    "score_project",
    "searchable_text",
]
