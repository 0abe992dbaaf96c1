from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from infrastructure.http.schemas import RepositoryCreated, RepositorySummary


_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _project(model: type[_ModelT], raw: Any) -> _ModelT:
    # model_construct skips validation so upstream values pass through untouched.
    source = raw if isinstance(raw, Mapping) else {}
    return model.model_construct(**{name: source.get(name) for name in model.model_fields})


def to_repository_summary(raw: Any) -> RepositorySummary:
    return _project(RepositorySummary, raw)


def to_repository_created(raw: Any) -> RepositoryCreated:
    return _project(RepositoryCreated, raw)


def to_repository_summaries(raw_repositories: Any) -> list[RepositorySummary]:
    if not isinstance(raw_repositories, list):
        return []
    return [to_repository_summary(raw) for raw in raw_repositories]
