"""
Inbox view derived from the raw message history.
"""

import logging
from typing import NamedTuple

from django.db.models import Count, Q

from .models import Message, User
from .services import as_uuid

logger = logging.getLogger(__name__)


class Conversation(NamedTuple):
    user: User
    last_message: Message
    unread_count: int


def get_conversations(user_id):
    """
    Return one conversation per counterpart of ``user_id``.

    Messages involving the user are scanned newest first; the first message
    seen for each counterpart becomes its ``last_message``. ``unread_count``
    counts every unread message the counterpart sent to the user.

    Conversations are ordered by most recent activity. Counterparts whose
    user record no longer resolves are left out.

    Returns:
        list[Conversation]
    """
    user_id = as_uuid(user_id)
    if user_id is None:
        return []

    messages = (
        Message.objects
        .filter(Q(sender_id=user_id) | Q(receiver_id=user_id))
        .order_by('-created_at', '-id')
    )

    last_messages = {}
    for message in messages.iterator():
        counterpart_id = message.receiver_id if message.sender_id == user_id else message.sender_id
        if counterpart_id not in last_messages:
            last_messages[counterpart_id] = message

    if not last_messages:
        return []

    unread_counts = {
        row['sender_id']: row['unread']
        for row in (
            Message.objects
            .filter(receiver_id=user_id, is_read=False)
            .order_by()
            .values('sender_id')
            .annotate(unread=Count('id'))
        )
    }

    users = User.objects.in_bulk(list(last_messages))

    conversations = []
    for counterpart_id, last_message in last_messages.items():
        counterpart = users.get(counterpart_id)
        if counterpart is None:
            logger.warning(f"Skipping conversation with unknown user {counterpart_id}")
            continue
        conversations.append(Conversation(
            user=counterpart,
            last_message=last_message,
            unread_count=unread_counts.get(counterpart_id, 0),
        ))

    return conversations
