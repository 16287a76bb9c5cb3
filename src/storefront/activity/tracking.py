"""Record an activity log entry."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.activity.activity_log import MAX_IP_LENGTH, MAX_USER_AGENT_LENGTH, ActivityAction, ActivityLog
from storefront.domain import logger, storefront


@storefront.command(part_of="ActivityLog")
class RecordActivity:
    user_id: Identifier()
    action: String(required=True, max_length=30)
    description: Text(required=True)
    ip_address: String(max_length=MAX_IP_LENGTH)
    user_agent: String(max_length=MAX_USER_AGENT_LENGTH)
    path: String(max_length=512)
    metadata: Text()  # JSON object


@storefront.command_handler(part_of=ActivityLog)
class RecordActivityHandler:
    @handle(RecordActivity)
    def record_activity(self, command):
        action = (command.action or "").upper()
        if action not in ActivityAction.__members__:
            raise ValidationError({"action": [f"Unknown activity action: {command.action}"]})

        entry = ActivityLog.record(
            action=action,
            description=command.description,
            user_id=command.user_id,
            ip_address=command.ip_address,
            user_agent=command.user_agent,
            path=command.path,
            metadata=json.loads(command.metadata) if command.metadata else None,
        )
        current_domain.repository_for(ActivityLog).add(entry)
        logger.debug("activity_recorded", action=action, user_id=command.user_id)
        return str(entry.id)
