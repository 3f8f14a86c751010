"""
Mailbox service

This service handles business logic for reading and organizing a user's mailbox:
- Folder listing with pagination and label filter
- Message detail
- Read / star / trash flags and permanent delete
- Label assignment
- Search

Every operation is scoped to the copies the user owns.
"""
import logging
from typing import Dict, Any, Optional, List

from django.db import transaction

from app_mail.consts.mail_const import MAIL_DB_ALIAS, LABEL_ACTION_ADD, LABEL_ACTION_REMOVE
from app_mail.enums.folder_enum import FolderEnum
from app_mail.exceptions.mail_not_found_exception import MailNotFoundException
from app_mail.exceptions.mail_validation_exception import MailValidationException
from app_mail.models.mail_message import MailMessage
from app_mail.repos import (
    get_owned_message,
    list_messages_by_folder,
    search_messages,
    update_owned_message,
    delete_mail_message,
    get_attachments_by_message,
    delete_attachments_by_message,
    get_owned_label,
    attach_label,
    detach_label,
    delete_links_by_message,
    get_labels_by_message,
    get_labels_by_messages,
)
from common.components.singleton import Singleton
from common.consts.query_const import LIMIT_PAGE, LIMIT_LIST
from common.utils.page_util import build_page, get_next_offset
from common.utils.string_util import explode

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Email not found or unauthorized"


def _message_to_dict(message: MailMessage, labels: List = None, with_body: bool = False) -> Dict[str, Any]:
    """
    Convert MailMessage model instance to dictionary

    Args:
        message: MailMessage model instance
        labels: Labels attached to the message
        with_body: Whether to include the body

    Returns:
        Message dictionary
    """
    data = {
        'id': message.id,
        'folder': message.folder,
        'from': message.from_address,
        'to': explode(message.to_addresses),
        'cc': explode(message.cc_addresses),
        'bcc': explode(message.bcc_addresses),
        'subject': message.subject,
        'is_read': message.is_read,
        'is_starred': message.is_starred,
        'is_spam': message.is_spam,
        'sent_at': message.sent_at,
        'draft_saved_at': message.draft_saved_at,
        'labels': [{'id': label.id, 'name': label.name} for label in (labels or [])],
    }
    if with_body:
        data['body'] = message.body
    return data


def _attachment_to_dict(attachment) -> Dict[str, Any]:
    return {
        'id': attachment.id,
        'filename': attachment.filename,
        'content_type': attachment.content_type,
        'size': attachment.size,
        'reference': attachment.reference,
    }


class MailboxService(Singleton):
    """Mailbox service"""

    def list_folder(
            self,
            owner_id: int,
            folder: str,
            label_id: Optional[int] = None,
            offset: int = 0,
            limit: int = LIMIT_PAGE
    ) -> Dict[str, Any]:
        """
        List messages of a folder, newest first

        Args:
            owner_id: Owner user ID
            folder: Folder name, 'starred' lists starred messages of any folder
            label_id: Only messages carrying this label (optional)
            offset: Pagination offset (default: 0)
            limit: Pagination limit (default: 20, max: 1000)

        Returns:
            Dictionary with paginated message data including:
            - data: List of message dictionaries
            - total_num: Total number of messages
            - next_offset: Next offset for pagination (None if last page)

        Raises:
            MailValidationException: If the folder is unknown
        """
        if FolderEnum.from_name(folder) is None:
            raise MailValidationException("Invalid folder name")

        if offset is None or offset < 0:
            offset = 0
        if limit is None or limit <= 0:
            limit = LIMIT_PAGE
        if limit > LIMIT_LIST:
            limit = LIMIT_LIST

        result = list_messages_by_folder(owner_id, folder, label_id=label_id, offset=offset, limit=limit)
        messages = result['messages']
        labels = get_labels_by_messages(message.id for message in messages)

        data = [_message_to_dict(message, labels.get(message.id)) for message in messages]
        return build_page(data, get_next_offset(offset, limit, result['total']), result['total'])

    def get_message(self, owner_id: int, message_id: int) -> Dict[str, Any]:
        """
        Get a message with its body, attachments and labels

        Raises:
            MailNotFoundException: If the message is not in the owner's mailbox
        """
        message = self._get_owned(owner_id, message_id)

        data = _message_to_dict(message, get_labels_by_message(message.id), with_body=True)
        data['attachments'] = [_attachment_to_dict(a) for a in get_attachments_by_message(message.id)]
        return data

    def mark_read(self, owner_id: int, message_id: int, is_read) -> bool:
        if not isinstance(is_read, bool):
            raise MailValidationException("isRead must be a boolean")
        self._update(owner_id, message_id, is_read=is_read)
        return True

    def star(self, owner_id: int, message_id: int, is_starred) -> Dict[str, Any]:
        """
        Star or unstar a message

        Returns:
            Message dictionary after the update
        """
        if not isinstance(is_starred, bool):
            raise MailValidationException("isStarred must be a boolean value")
        self._update(owner_id, message_id, is_starred=is_starred)

        message = self._get_owned(owner_id, message_id)
        return _message_to_dict(message, get_labels_by_message(message.id))

    def move_to_trash(self, owner_id: int, message_id: int) -> bool:
        self._update(owner_id, message_id, folder=FolderEnum.TRASH.value)
        logger.info(f"[MailboxService.move_to_trash] Moved to trash: id={message_id}, owner_id={owner_id}")
        return True

    def delete_message(self, owner_id: int, message_id: int) -> bool:
        """
        Permanently delete a message with its attachment rows and label links.
        Stored attachment objects may be shared with other copies and are kept.

        Raises:
            MailNotFoundException: If the message is not in the owner's mailbox
        """
        message = self._get_owned(owner_id, message_id)

        with transaction.atomic(using=MAIL_DB_ALIAS):
            delete_links_by_message(message.id)
            delete_attachments_by_message(message.id)
            delete_mail_message(message.id)

        logger.info(f"[MailboxService.delete_message] Deleted message: id={message.id}, owner_id={owner_id}")
        return True

    def update_message_label(self, owner_id: int, message_id: int, label_id: int, action: str) -> bool:
        """
        Add a label to a message or remove it

        Args:
            owner_id: Owner user ID
            message_id: MailMessage ID
            label_id: MailLabel ID
            action: 'add' or 'remove'

        Raises:
            MailValidationException: If the action is unknown
            MailNotFoundException: If the message or the label is not the owner's
        """
        if action not in (LABEL_ACTION_ADD, LABEL_ACTION_REMOVE):
            raise MailValidationException("Invalid action")

        message = self._get_owned(owner_id, message_id)
        label = get_owned_label(owner_id, label_id)
        if not label:
            raise MailNotFoundException("Label not found or unauthorized")

        if action == LABEL_ACTION_ADD:
            attach_label(message.id, label.id)
        else:
            detach_label(message.id, label.id)
        return True

    def search(
            self,
            owner_id: int,
            keyword: Optional[str] = None,
            from_address: Optional[str] = None,
            to_address: Optional[str] = None,
            has_attachment: bool = False,
            start_ms: Optional[int] = None,
            end_ms: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Search messages outside the trash, newest first.
        Copies of one send (same sender, subject and send time) appear once.

        Returns:
            List of message dictionaries
        """
        messages = search_messages(
            owner_id,
            keyword=keyword or None,
            from_address=from_address or None,
            to_address=to_address or None,
            has_attachment=bool(has_attachment),
            start_ms=start_ms,
            end_ms=end_ms
        )

        seen = set()
        unique = []
        for message in messages:
            key = (message.from_address, message.subject, message.sent_at)
            if key in seen:
                continue
            seen.add(key)
            unique.append(message)

        labels = get_labels_by_messages(message.id for message in unique)
        return [_message_to_dict(message, labels.get(message.id)) for message in unique]

    def _get_owned(self, owner_id: int, message_id: int) -> MailMessage:
        message = get_owned_message(owner_id, message_id)
        if not message:
            raise MailNotFoundException(NOT_FOUND_MESSAGE)
        return message

    def _update(self, owner_id: int, message_id: int, **kwargs) -> None:
        updated = update_owned_message(owner_id, message_id, **kwargs)
        if updated == 0:
            raise MailNotFoundException(NOT_FOUND_MESSAGE)
