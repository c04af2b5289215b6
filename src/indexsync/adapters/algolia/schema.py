"""Pydantic models describing Algolia REST payloads and stored records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AlgoliaBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ContentBlockPayload(AlgoliaBaseModel):
    id: str
    codename: str
    name: str = ""
    language: str
    type: str
    collection: str = "default"
    parents: list[str] = Field(default_factory=list[str])
    contents: str = ""


class RecordPayload(AlgoliaBaseModel):
    object_id: str = Field(alias="objectID")
    id: str
    codename: str
    name: str = ""
    language: str
    type: str
    collection: str = "default"
    slug: str = ""
    content: list[ContentBlockPayload] = Field(default_factory=list[ContentBlockPayload])


class SearchHit(AlgoliaBaseModel):
    object_id: str = Field(alias="objectID")
    codename: str
    language: str


class SearchResponse(AlgoliaBaseModel):
    hits: list[dict[str, object]] = Field(default_factory=list[dict[str, object]])


class BatchResponse(AlgoliaBaseModel):
    task_id: int = Field(alias="taskID")
    object_ids: list[str] = Field(default_factory=list[str], alias="objectIDs")


class TaskStatusResponse(AlgoliaBaseModel):
    status: str


class ErrorResponse(AlgoliaBaseModel):
    message: str = ""
    status: int | None = None
