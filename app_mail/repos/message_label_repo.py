"""
Message label repository

Maintains which labels are attached to which message copies.
"""
import logging
from collections import defaultdict
from typing import List, Dict, Iterable

from app_mail.consts.mail_const import MAIL_DB_ALIAS
from app_mail.models.mail_label import MailLabel
from app_mail.models.message_label import MessageLabel
from common.utils.date_util import get_now_timestamp_ms

logger = logging.getLogger(__name__)


def attach_label(message_id: int, label_id: int) -> bool:
    """
    Attach a label to a message, attaching twice is a no-op

    Args:
        message_id: MailMessage ID
        label_id: MailLabel ID

    Returns:
        True if the label was newly attached
    """
    try:
        _, created = MessageLabel.objects.using(MAIL_DB_ALIAS).get_or_create(
            message_id=message_id,
            label_id=label_id,
            defaults={'ct': get_now_timestamp_ms()}
        )
        return created
    except Exception as e:
        logger.exception(f"[attach_label] Error attaching label: {e}")
        raise


def detach_label(message_id: int, label_id: int) -> int:
    """
    Detach a label from one message

    Returns:
        Number of links removed
    """
    try:
        deleted, _ = MessageLabel.objects.using(MAIL_DB_ALIAS).filter(
            message_id=message_id,
            label_id=label_id
        ).delete()
        return deleted
    except Exception as e:
        logger.exception(f"[detach_label] Error detaching label: {e}")
        raise


def detach_label_from_all(label_id: int) -> int:
    """
    Detach a label from every message carrying it, messages are kept

    Returns:
        Number of links removed
    """
    try:
        deleted, _ = MessageLabel.objects.using(MAIL_DB_ALIAS).filter(label_id=label_id).delete()
        return deleted
    except Exception as e:
        logger.exception(f"[detach_label_from_all] Error detaching label: {e}")
        raise


def delete_links_by_message(message_id: int) -> int:
    try:
        deleted, _ = MessageLabel.objects.using(MAIL_DB_ALIAS).filter(message_id=message_id).delete()
        return deleted
    except Exception as e:
        logger.exception(f"[delete_links_by_message] Error deleting label links: {e}")
        raise


def get_labels_by_messages(message_ids: Iterable[int]) -> Dict[int, List[MailLabel]]:
    """
    Get the labels attached to each message

    Args:
        message_ids: MailMessage IDs

    Returns:
        Dictionary of message ID -> labels (messages without labels are absent)
    """
    message_ids = list(message_ids)
    if not message_ids:
        return {}
    try:
        links = list(MessageLabel.objects.using(MAIL_DB_ALIAS).filter(message_id__in=message_ids).order_by('id'))
        labels = MailLabel.objects.using(MAIL_DB_ALIAS).in_bulk([link.label_id for link in links])

        result = defaultdict(list)
        for link in links:
            label = labels.get(link.label_id)
            if label is not None:
                result[link.message_id].append(label)
        return dict(result)
    except Exception as e:
        logger.exception(f"[get_labels_by_messages] Error getting labels: {e}")
        return {}


def get_labels_by_message(message_id: int) -> List[MailLabel]:
    return get_labels_by_messages([message_id]).get(message_id, [])
