"""
Auto-reply repository

This module provides database operations for AutoReply model.
"""
import logging
from typing import Optional

from app_mail.consts.mail_const import MAIL_DB_ALIAS
from app_mail.models.auto_reply import AutoReply
from common.utils.date_util import get_now_timestamp_ms

logger = logging.getLogger(__name__)


def get_auto_reply_by_owner(owner_id: int) -> Optional[AutoReply]:
    """
    Get auto-reply settings of a user

    Args:
        owner_id: Owner user ID

    Returns:
        AutoReply instance or None if never configured
    """
    try:
        return AutoReply.objects.using(MAIL_DB_ALIAS).filter(owner_id=owner_id).first()
    except Exception as e:
        logger.exception(f"[get_auto_reply_by_owner] Error getting auto-reply: {e}")
        return None


def create_auto_reply(owner_id: int, enabled: bool, message: Optional[str] = None) -> AutoReply:
    """
    Create auto-reply settings of a user

    Args:
        owner_id: Owner user ID
        enabled: Whether auto-reply is on
        message: Reply text, the model default when None

    Returns:
        Created AutoReply instance
    """
    try:
        now = get_now_timestamp_ms()
        fields = {
            'owner_id': owner_id,
            'enabled': enabled,
            'ct': now,
            'ut': now,
        }
        if message is not None:
            fields['message'] = message
        return AutoReply.objects.using(MAIL_DB_ALIAS).create(**fields)
    except Exception as e:
        logger.exception(f"[create_auto_reply] Error creating auto-reply: {e}")
        raise


def update_auto_reply(auto_reply: AutoReply, **kwargs) -> AutoReply:
    """
    Update auto-reply settings

    Args:
        auto_reply: AutoReply instance
        **kwargs: Fields to update (enabled, message)

    Returns:
        Updated AutoReply instance
    """
    try:
        for key, value in kwargs.items():
            setattr(auto_reply, key, value)
        auto_reply.ut = get_now_timestamp_ms()
        auto_reply.save(using=MAIL_DB_ALIAS)
        return auto_reply
    except Exception as e:
        logger.exception(f"[update_auto_reply] Error updating auto-reply: {e}")
        raise
