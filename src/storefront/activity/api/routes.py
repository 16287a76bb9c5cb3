"""FastAPI endpoints for recording and reviewing user activity."""

import json
from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from protean.utils.globals import current_domain

from storefront.activity.activity_log import MAX_IP_LENGTH, MAX_USER_AGENT_LENGTH
from storefront.activity.api.schemas import (
    ActivityIdResponse,
    ActivityLogResponse,
    CreateActivityLogRequest,
)
from storefront.activity.queries import DEFAULT_LIMIT, activity_logs
from storefront.activity.tracking import RecordActivity
from storefront.identity.api.deps import admin_user, optional_user
from storefront.identity.user.user import User

activity_router = APIRouter(prefix="/activity", tags=["activity"])


def _client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def _clip(value: str | None, limit: int) -> str | None:
    return value[:limit] if value else None


@activity_router.post("", status_code=201, response_model=ActivityIdResponse)
async def create_activity_log(
    body: CreateActivityLogRequest,
    request: Request,
    user: User | None = Depends(optional_user),
) -> ActivityIdResponse:
    command = RecordActivity(
        user_id=str(user.id) if user else None,
        action=body.action,
        description=body.description,
        ip_address=_clip(body.ip_address or _client_ip(request), MAX_IP_LENGTH),
        user_agent=_clip(body.user_agent or request.headers.get("user-agent"), MAX_USER_AGENT_LENGTH),
        path=body.path,
        metadata=json.dumps(body.metadata) if body.metadata is not None else None,
    )
    result = current_domain.process(command, asynchronous=False)
    return ActivityIdResponse(activity_id=result)


@activity_router.get("", response_model=list[ActivityLogResponse])
async def all_activity_logs(
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=DEFAULT_LIMIT),
    from_date: date | None = None,
    to_date: date | None = None,
    _: User = Depends(admin_user),
) -> list[ActivityLogResponse]:
    entries = activity_logs(limit=limit, from_date=from_date, to_date=to_date)
    return [ActivityLogResponse.from_entry(entry) for entry in entries]


@activity_router.get("/users/{user_id}", response_model=list[ActivityLogResponse])
async def user_activity_logs(
    user_id: str,
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=DEFAULT_LIMIT),
    from_date: date | None = None,
    to_date: date | None = None,
    _: User = Depends(admin_user),
) -> list[ActivityLogResponse]:
    entries = activity_logs(user_id=user_id, limit=limit, from_date=from_date, to_date=to_date)
    return [ActivityLogResponse.from_entry(entry) for entry in entries]
