"""Pydantic models describing Kontent.ai Delivery API item payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class KontentBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SystemPayload(KontentBaseModel):
    id: str
    name: str = ""
    codename: str
    language: str
    type: str
    collection: str = "default"
    last_modified: str | None = None


class ElementPayload(KontentBaseModel):
    type: str
    name: str = ""
    value: object = None
    # rich text lists the components and linked items it embeds here
    modular_content: list[str] = Field(default_factory=list[str])


class ItemPayload(KontentBaseModel):
    system: SystemPayload
    elements: dict[str, ElementPayload] = Field(default_factory=dict[str, ElementPayload])


class ItemResponse(KontentBaseModel):
    item: ItemPayload
    modular_content: dict[str, ItemPayload] = Field(default_factory=dict[str, ItemPayload])
