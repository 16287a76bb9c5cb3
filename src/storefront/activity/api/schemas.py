"""Pydantic request/response schemas for activity tracking."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from storefront.activity.activity_log import ActivityLog


class CreateActivityLogRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "action": "VIEW_PRODUCT",
                    "description": "Viewed Stoneware Mug",
                    "path": "/products/2f0c9b7e",
                    "metadata": {"product_id": "2f0c9b7e"},
                }
            ]
        }
    }

    action: str = Field(..., max_length=30)
    description: str = Field(..., min_length=1)
    ip_address: str | None = Field(None, max_length=64)
    user_agent: str | None = Field(None, max_length=512)
    path: str | None = Field(None, max_length=512)
    metadata: dict[str, Any] | None = None


class ActivityLogResponse(BaseModel):
    id: str
    user_id: str | None = None
    action: str
    description: str
    ip_address: str | None = None
    user_agent: str | None = None
    path: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entry(cls, entry: ActivityLog) -> "ActivityLogResponse":
        return cls(
            id=str(entry.id),
            user_id=str(entry.user_id) if entry.user_id else None,
            action=entry.action,
            description=entry.description,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            path=entry.path,
            metadata=entry.metadata,
            created_at=entry.created_at,
        )


class ActivityIdResponse(BaseModel):
    activity_id: str
