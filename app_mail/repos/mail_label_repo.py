"""
Mail label repository

This module provides database operations for MailLabel model.
"""
import logging
from typing import Optional, List, Tuple

from django.db import IntegrityError, transaction

from app_mail.consts.mail_const import MAIL_DB_ALIAS
from app_mail.models.mail_label import MailLabel
from common.utils.date_util import get_now_timestamp_ms

logger = logging.getLogger(__name__)


def get_owned_label(owner_id: int, label_id: int) -> Optional[MailLabel]:
    """
    Get a label belonging to the owner

    Args:
        owner_id: Owner user ID
        label_id: MailLabel ID

    Returns:
        MailLabel instance or None if not found for this owner
    """
    try:
        return MailLabel.objects.using(MAIL_DB_ALIAS).filter(id=label_id, owner_id=owner_id).first()
    except Exception as e:
        logger.exception(f"[get_owned_label] Error getting label: {e}")
        return None


def get_labels_by_owner(owner_id: int) -> List[MailLabel]:
    """
    Get all labels of an owner, oldest first
    """
    try:
        return list(MailLabel.objects.using(MAIL_DB_ALIAS).filter(owner_id=owner_id).order_by('id'))
    except Exception as e:
        logger.exception(f"[get_labels_by_owner] Error getting labels: {e}")
        return []


def get_label_by_owner_and_name(owner_id: int, name: str) -> Optional[MailLabel]:
    """
    Get a label of the owner by name, system or not

    Args:
        owner_id: Owner user ID
        name: Label name

    Returns:
        MailLabel instance or None if not found
    """
    try:
        return MailLabel.objects.using(MAIL_DB_ALIAS).filter(owner_id=owner_id, name=name).first()
    except Exception as e:
        logger.exception(f"[get_label_by_owner_and_name] Error getting label: {e}")
        return None


def create_label(owner_id: int, name: str, is_system_label: bool = False) -> MailLabel:
    """
    Create a new label

    Args:
        owner_id: Owner user ID
        name: Label name
        is_system_label: Whether the label is managed by the platform

    Returns:
        Created MailLabel instance

    Raises:
        IntegrityError: If (owner_id, name, is_system_label) already exists
    """
    try:
        now = get_now_timestamp_ms()
        return MailLabel.objects.using(MAIL_DB_ALIAS).create(
            owner_id=owner_id,
            name=name,
            is_system_label=is_system_label,
            ct=now,
            ut=now
        )
    except Exception as e:
        logger.exception(f"[create_label] Error creating label: {e}")
        raise


def get_or_create_system_label(owner_id: int, name: str) -> Tuple[MailLabel, bool]:
    """
    Get or create a system label of the owner

    Concurrent callers end up with the same row, the unique constraint on
    (owner_id, name, is_system_label) rejects the second insert and the
    loser reads the winner's row.

    Args:
        owner_id: Owner user ID
        name: Label name

    Returns:
        Tuple of (MailLabel instance, created flag)
    """
    now = get_now_timestamp_ms()
    try:
        with transaction.atomic(using=MAIL_DB_ALIAS):
            return MailLabel.objects.using(MAIL_DB_ALIAS).get_or_create(
                owner_id=owner_id,
                name=name,
                is_system_label=True,
                defaults={
                    'ct': now,
                    'ut': now
                }
            )
    except IntegrityError:
        logger.info(f"[get_or_create_system_label] Lost creation race, reading: owner_id={owner_id}, name={name}")
        label = MailLabel.objects.using(MAIL_DB_ALIAS).get(
            owner_id=owner_id,
            name=name,
            is_system_label=True
        )
        return label, False
    except Exception as e:
        logger.exception(f"[get_or_create_system_label] Error getting/creating label: {e}")
        raise


def update_label_name(label_id: int, name: str) -> int:
    """
    Rename a label

    Args:
        label_id: MailLabel ID
        name: New name

    Returns:
        Number of rows updated
    """
    try:
        return MailLabel.objects.using(MAIL_DB_ALIAS).filter(id=label_id).update(
            name=name,
            ut=get_now_timestamp_ms()
        )
    except Exception as e:
        logger.exception(f"[update_label_name] Error updating label: {e}")
        raise


def delete_label(label_id: int) -> bool:
    """
    Delete label (hard delete)

    Args:
        label_id: MailLabel ID

    Returns:
        True if deleted, False if not found
    """
    try:
        deleted, _ = MailLabel.objects.using(MAIL_DB_ALIAS).filter(id=label_id).delete()
        return deleted > 0
    except Exception as e:
        logger.exception(f"[delete_label] Error deleting label: {e}")
        raise
