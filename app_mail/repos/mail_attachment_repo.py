"""
Mail attachment repository

This module provides database operations for MailAttachment model.
"""
import logging
from typing import List

from app_mail.consts.mail_const import MAIL_DB_ALIAS
from app_mail.models.mail_attachment import MailAttachment
from common.utils.date_util import get_now_timestamp_ms

logger = logging.getLogger(__name__)


def create_mail_attachment(
        message_id: int,
        filename: str,
        size: int,
        oss_bucket: str,
        oss_key: str,
        content_type: str = 'application/octet-stream',
        ct: int = 0
) -> MailAttachment:
    """
    Create a new mail attachment

    Args:
        message_id: MailMessage ID
        filename: Display name
        size: Size in bytes
        oss_bucket: Object storage bucket
        oss_key: Object storage key
        content_type: MIME type
        ct: Create timestamp (milliseconds)

    Returns:
        Created MailAttachment instance
    """
    try:
        if ct == 0:
            ct = get_now_timestamp_ms()

        return MailAttachment.objects.using(MAIL_DB_ALIAS).create(
            message_id=message_id,
            filename=filename,
            content_type=content_type,
            size=size,
            oss_bucket=oss_bucket,
            oss_key=oss_key,
            ct=ct
        )
    except Exception as e:
        logger.exception(f"[create_mail_attachment] Error creating attachment: {e}")
        raise


def get_attachments_by_message(message_id: int) -> List[MailAttachment]:
    """
    Get attachments of a message in insertion order

    Args:
        message_id: MailMessage ID

    Returns:
        List of MailAttachment instances
    """
    try:
        return list(MailAttachment.objects.using(MAIL_DB_ALIAS).filter(message_id=message_id).order_by('id'))
    except Exception as e:
        logger.exception(f"[get_attachments_by_message] Error getting attachments: {e}")
        return []


def delete_attachments_by_message(message_id: int) -> int:
    """
    Delete all attachments of a message

    Args:
        message_id: MailMessage ID

    Returns:
        Number of attachments deleted
    """
    try:
        deleted, _ = MailAttachment.objects.using(MAIL_DB_ALIAS).filter(message_id=message_id).delete()
        return deleted
    except Exception as e:
        logger.exception(f"[delete_attachments_by_message] Error deleting attachments: {e}")
        raise
