"""
Real-time mail notifications (Django Channels)

Events are published to one channel layer group per mailbox address.
Consumers subscribe to that group; delivery is fire-and-forget.
"""
import hashlib
import logging
from typing import Dict, Any

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from app_mail.config import get_app_config
from app_mail.consts.mail_const import (
    NOTIFY_EVENT_NEW_EMAIL,
    NOTIFY_GROUP_PREFIX,
    NOTIFY_MESSAGE_TYPE,
)

logger = logging.getLogger(__name__)


def group_for_address(email: str) -> str:
    """
    Group name of a mailbox address

    Group names only allow ASCII letters, digits, hyphens, underscores and
    periods, so the address is hashed.
    """
    digest = hashlib.md5((email or '').strip().lower().encode('utf-8')).hexdigest()
    return f"{NOTIFY_GROUP_PREFIX}{digest}"


def publish(channel: str, event: str, payload: Dict[str, Any]) -> bool:
    """
    Publish an event to the subscribers of an address

    Args:
        channel: Mailbox address
        event: Event name
        payload: Event data

    Returns:
        True if handed to the channel layer, False if skipped or failed
    """
    try:
        if not get_app_config().get("notify_enabled", True):
            return False

        layer = get_channel_layer()
        if layer is None:
            logger.warning(f"[publish] No channel layer configured, skip {event} for {channel}")
            return False

        async_to_sync(layer.group_send)(
            group_for_address(channel),
            {"type": NOTIFY_MESSAGE_TYPE, "event": event, "data": payload},
        )
        return True
    except Exception as e:
        logger.warning(f"[publish] Failed to publish {event} for {channel}: {e}")
        return False


def notify_new_email(address: str, sender: str, subject: str, sent_at: int, is_spam: bool = False) -> bool:
    return publish(address, NOTIFY_EVENT_NEW_EMAIL, {
        "sender": sender,
        "subject": subject,
        "sentAt": sent_at,
        "isSpam": is_spam,
    })
