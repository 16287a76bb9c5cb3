"""Activity log queries for the admin console."""

from datetime import UTC, date, datetime, time, timedelta

from protean.utils.globals import current_domain

from storefront.activity.activity_log import ActivityLog

DEFAULT_LIMIT = 1000


def _window(from_date: date | None, to_date: date | None) -> dict:
    criteria = {}
    if from_date is not None:
        criteria["created_at__gte"] = datetime.combine(from_date, time.min, tzinfo=UTC)
    if to_date is not None:
        # Inclusive of the whole final day
        criteria["created_at__lt"] = datetime.combine(to_date + timedelta(days=1), time.min, tzinfo=UTC)
    return criteria


def activity_logs(
    user_id: str | None = None,
    limit: int = DEFAULT_LIMIT,
    from_date: date | None = None,
    to_date: date | None = None,
) -> list[ActivityLog]:
    criteria = _window(from_date, to_date)
    if user_id is not None:
        criteria["user_id"] = str(user_id)

    return (
        current_domain.repository_for(ActivityLog)
        ._dao.query.filter(**criteria)
        .order_by("-created_at")
        .limit(min(limit, DEFAULT_LIMIT))
        .all()
        .items
    )
