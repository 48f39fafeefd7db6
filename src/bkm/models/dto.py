"""Plain-data shapes of the JSON files, before domain validation."""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class BookmarkDto(BaseModel):
    """One element of the ``bookmarks.json`` array."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "TypeScript Guide",
                "url": "https://www.typescriptlang.org/docs/",
                "tags": ["typescript", "docs"],
                "createdAt": "2026-02-03T10:30:00.000000Z",
                "updatedAt": "2026-02-03T10:30:00.000000Z",
            }
        },
    )

    id: str
    title: str
    url: str
    tags: List[str] = Field(default_factory=list)
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ConfigDto(BaseModel):
    """One element of the ``config.json`` array."""

    model_config = ConfigDict(populate_by_name=True)

    key: str
    value: str
    updated_at: str = Field(..., alias="updatedAt")

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
