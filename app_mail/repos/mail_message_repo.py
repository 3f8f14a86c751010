"""
Mail message repository

This module provides database operations for MailMessage model.
Every query that serves a user is scoped to the copies that user owns.
"""
import logging
from typing import Optional, List, Dict, Any

from django.db.models import Q

from app_mail.consts.mail_const import MAIL_DB_ALIAS
from app_mail.enums.folder_enum import FolderEnum
from app_mail.models.mail_attachment import MailAttachment
from app_mail.models.mail_message import MailMessage
from app_mail.models.message_label import MessageLabel
from common.utils.date_util import get_now_timestamp_ms

logger = logging.getLogger(__name__)


def create_mail_message(
        owner_id: int,
        folder: str,
        from_address: str,
        to_addresses: str = '',
        cc_addresses: str = '',
        bcc_addresses: str = '',
        subject: str = '',
        body: str = '',
        is_spam: bool = False,
        sent_at: int = 0,
        draft_saved_at: Optional[int] = None,
        ct: int = 0,
        ut: int = 0
) -> MailMessage:
    """
    Create a new mail message copy

    Args:
        owner_id: Owner user ID
        folder: Folder name (FolderEnum value)
        from_address: From address
        to_addresses: To addresses (comma-separated)
        cc_addresses: CC addresses (comma-separated)
        bcc_addresses: BCC addresses (comma-separated)
        subject: Email subject
        body: HTML body
        is_spam: Spam verdict of this copy
        sent_at: Send timestamp (milliseconds)
        draft_saved_at: Draft save timestamp (milliseconds), drafts only
        ct: Create timestamp (milliseconds)
        ut: Update timestamp (milliseconds)

    Returns:
        Created MailMessage instance
    """
    try:
        now = get_now_timestamp_ms()
        if ct == 0:
            ct = now
        if ut == 0:
            ut = now

        return MailMessage.objects.using(MAIL_DB_ALIAS).create(
            owner_id=owner_id,
            folder=folder,
            from_address=from_address,
            to_addresses=to_addresses,
            cc_addresses=cc_addresses,
            bcc_addresses=bcc_addresses,
            subject=subject,
            body=body,
            is_spam=is_spam,
            sent_at=sent_at,
            draft_saved_at=draft_saved_at,
            ct=ct,
            ut=ut
        )
    except Exception as e:
        logger.exception(f"[create_mail_message] Error creating message: {e}")
        raise


def get_owned_message(owner_id: int, message_id: int) -> Optional[MailMessage]:
    """
    Get a message copy held in the owner's mailbox

    Args:
        owner_id: Owner user ID
        message_id: MailMessage ID

    Returns:
        MailMessage instance or None if not found in this mailbox
    """
    try:
        return MailMessage.objects.using(MAIL_DB_ALIAS).filter(
            id=message_id,
            owner_id=owner_id
        ).first()
    except Exception as e:
        logger.exception(f"[get_owned_message] Error getting message: {e}")
        return None


def get_messages_by_owner(owner_id: int) -> List[MailMessage]:
    """
    Get every message copy of an owner, oldest first
    """
    try:
        return list(MailMessage.objects.using(MAIL_DB_ALIAS).filter(owner_id=owner_id).order_by('id'))
    except Exception as e:
        logger.exception(f"[get_messages_by_owner] Error getting messages: {e}")
        return []


def list_messages_by_folder(
        owner_id: int,
        folder: str,
        label_id: Optional[int] = None,
        offset: int = 0,
        limit: int = 20
) -> Dict[str, Any]:
    """
    List an owner's messages of one folder, newest first

    Args:
        owner_id: Owner user ID
        folder: Folder name; 'starred' selects starred copies of any folder
        label_id: Only messages carrying this label (optional)
        offset: Offset for pagination
        limit: Limit for pagination

    Returns:
        Dictionary with 'messages' (list) and 'total' (int)
    """
    try:
        query = MailMessage.objects.using(MAIL_DB_ALIAS).filter(owner_id=owner_id)

        if folder == FolderEnum.STARRED.value:
            query = query.filter(is_starred=True)
        else:
            query = query.filter(folder=folder)

        if label_id is not None:
            labeled = MessageLabel.objects.using(MAIL_DB_ALIAS).filter(label_id=label_id).values('message_id')
            query = query.filter(id__in=labeled)

        total = query.count()
        messages = query.order_by('-sent_at', '-draft_saved_at', '-id')[offset:offset + limit]

        return {
            'messages': list(messages),
            'total': total
        }
    except Exception as e:
        logger.exception(f"[list_messages_by_folder] Error listing messages: {e}")
        raise


def search_messages(
        owner_id: int,
        keyword: Optional[str] = None,
        from_address: Optional[str] = None,
        to_address: Optional[str] = None,
        has_attachment: bool = False,
        start_ms: Optional[int] = None,
        end_ms: Optional[int] = None
) -> List[MailMessage]:
    """
    Search an owner's messages outside the trash, newest first

    Args:
        owner_id: Owner user ID
        keyword: Matches subject or body, case-insensitive (optional)
        from_address: Substring of the sender, case-insensitive (optional)
        to_address: Substring of to or cc, case-insensitive (optional)
        has_attachment: Only messages with at least one attachment
        start_ms: Sent at or after (milliseconds, optional)
        end_ms: Sent at or before (milliseconds, optional)

    Returns:
        List of MailMessage instances
    """
    try:
        query = MailMessage.objects.using(MAIL_DB_ALIAS).filter(
            owner_id=owner_id
        ).exclude(folder=FolderEnum.TRASH.value)

        if keyword:
            query = query.filter(Q(subject__icontains=keyword) | Q(body__icontains=keyword))
        if from_address:
            query = query.filter(from_address__icontains=from_address)
        if to_address:
            query = query.filter(Q(to_addresses__icontains=to_address) | Q(cc_addresses__icontains=to_address))
        if has_attachment:
            attached = MailAttachment.objects.using(MAIL_DB_ALIAS).values('message_id')
            query = query.filter(id__in=attached)
        if start_ms is not None:
            query = query.filter(sent_at__gte=start_ms)
        if end_ms is not None:
            query = query.filter(sent_at__lte=end_ms)

        return list(query.order_by('-sent_at', 'folder', '-id'))
    except Exception as e:
        logger.exception(f"[search_messages] Error searching messages: {e}")
        raise


def update_owned_message(owner_id: int, message_id: int, **kwargs) -> int:
    """
    Update status fields of a message copy held in the owner's mailbox

    Args:
        owner_id: Owner user ID
        message_id: MailMessage ID
        **kwargs: Fields to update (is_read, is_starred, folder)

    Returns:
        Number of rows updated
    """
    try:
        kwargs.setdefault('ut', get_now_timestamp_ms())
        return MailMessage.objects.using(MAIL_DB_ALIAS).filter(
            id=message_id,
            owner_id=owner_id
        ).update(**kwargs)
    except Exception as e:
        logger.exception(f"[update_owned_message] Error updating message: {e}")
        raise


def delete_mail_message(message_id: int) -> bool:
    """
    Delete mail message

    Args:
        message_id: MailMessage ID

    Returns:
        True if a row was deleted, False otherwise
    """
    try:
        deleted, _ = MailMessage.objects.using(MAIL_DB_ALIAS).filter(id=message_id).delete()
        return deleted > 0
    except Exception as e:
        logger.exception(f"[delete_mail_message] Error deleting message: {e}")
        raise
