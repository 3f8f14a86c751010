"""
Mail fan-out service

This service turns one logical send into stored copies:
- one copy in the sender's sent folder
- one inbox or spam copy per recipient, cc and bcc address
- a "newEmail" notification per delivered copy
- at most one auto-reply per "To" recipient, never replied to again

The sent copy is committed before any recipient copy. Every recipient copy is
committed on its own, so one address failing never aborts another.
"""
import logging
import re
from typing import Dict, Any, List, Optional, Iterable

from django.db import transaction

from app_mail.consts.mail_const import (
    MAIL_DB_ALIAS,
    EMAIL_ADDRESS_PATTERN,
    SUBJECT_PREFIX_REPLY,
    SUBJECT_PREFIX_FORWARD,
    SUBJECT_PREFIX_AUTO_REPLY,
    QUOTE_SEPARATOR_REPLY,
    QUOTE_SEPARATOR_FORWARD,
)
from app_mail.enums.folder_enum import FolderEnum
from app_mail.exceptions.mail_not_found_exception import MailNotFoundException
from app_mail.exceptions.mail_validation_exception import MailValidationException
from app_mail.models.mail_message import MailMessage
from app_mail.models.mail_user import MailUser
from app_mail.pojo.mail_draft import MailDraft, AttachmentRef
from app_mail.repos import (
    get_user_by_email,
    get_verified_user_by_email,
    get_verified_users_by_emails,
    get_owned_message,
    get_attachments_by_message,
    create_mail_message,
    create_mail_attachment,
    attach_label,
)
from app_mail.services import notification_service
from app_mail.services.attachment_store_service import AttachmentStoreService
from app_mail.services.auto_reply_service import AutoReplyService
from app_mail.services.mail_label_service import MailLabelService
from app_mail.services.spam_classifier_service import classify
from common.components.singleton import Singleton
from common.consts.string_const import EMPTY_STRING
from common.utils.date_util import get_now_timestamp_ms
from common.utils.string_util import check_blank, implode, unique_keep_order

logger = logging.getLogger(__name__)

_address_regex = re.compile(EMAIL_ADDRESS_PATTERN)


def clean_addresses(addresses: Optional[Iterable]) -> List[str]:
    """
    Drop entries that are not well-formed addresses, then repeated ones

    [" a@x.com", "bad", 3, "a@x.com", "b@x.com"] -> ["a@x.com", "b@x.com"]
    """
    if not addresses:
        return []
    cleaned = []
    for address in addresses:
        if not isinstance(address, str) or check_blank(address):
            continue
        address = address.strip()
        if _address_regex.match(address):
            cleaned.append(address)
    return unique_keep_order(cleaned)


class MailFanoutService(Singleton):
    """Send, reply, forward and save drafts"""

    def __init__(self):
        self.attachment_store = AttachmentStoreService()
        self.label_service = MailLabelService()
        self.auto_reply_service = AutoReplyService()

    def send(
            self,
            sender: str,
            recipients,
            cc=None,
            bcc=None,
            subject=None,
            body=None,
            files=None
    ) -> Dict[str, Any]:
        """
        Send a new message

        Args:
            sender: Sender email address
            recipients: "To" addresses (list)
            cc: CC addresses (list, optional)
            bcc: BCC addresses (list, optional)
            subject: Subject, required
            body: HTML body, required
            files: Uploaded files (optional)

        Returns:
            Dictionary with message_id (sent copy), is_spam, delivered and failed

        Raises:
            MailValidationException: Malformed input or unknown/unverified address
            MailNotFoundException: Sender has no mailbox
            AttachmentUploadException: Attachment upload failed, nothing stored
        """
        if (not isinstance(recipients, list) or not recipients
                or not isinstance(subject, str) or not subject
                or not isinstance(body, str) or not body):
            raise MailValidationException("Recipients (array), subject (string), and body (string) are required")
        if cc is not None and not isinstance(cc, list):
            raise MailValidationException("CC must be an array")
        if bcc is not None and not isinstance(bcc, list):
            raise MailValidationException("BCC must be an array")

        recipients = clean_addresses(recipients)
        cc = clean_addresses(cc)
        bcc = clean_addresses(bcc)
        if not recipients:
            raise MailValidationException("At least one valid recipient is required")

        sender_user = self._get_sender(sender)
        users = self._resolve_targets(recipients, cc, bcc)

        attachments = self.attachment_store.upload_files(sender_user.id, files)

        draft = MailDraft(
            sender=sender,
            recipients=tuple(recipients),
            cc=tuple(cc),
            bcc=tuple(bcc),
            subject=subject,
            body=body,
            attachments=tuple(attachments)
        )
        return self._fan_out(sender_user, draft, users, with_auto_reply=True)

    def reply(self, original_message_id: int, sender: str, body=None, files=None) -> Dict[str, Any]:
        """
        Reply to the sender of a message in the sender's mailbox

        Raises:
            MailNotFoundException: Original message not in the sender's mailbox
            MailValidationException: Original sender is not a verified user
            AttachmentUploadException: Attachment upload failed, nothing stored
        """
        if body is not None and not isinstance(body, str):
            raise MailValidationException("Body must be a string")

        sender_user = self._get_sender(sender)
        original = self._get_original(sender_user.id, original_message_id)

        recipient = get_verified_user_by_email(original.from_address)
        if not recipient:
            raise MailValidationException("Recipient email not found or unverified")

        attachments = self.attachment_store.upload_files(sender_user.id, files)

        draft = MailDraft(
            sender=sender,
            recipients=(original.from_address,),
            subject=f"{SUBJECT_PREFIX_REPLY}{original.subject}",
            body=f"{body or EMPTY_STRING}{QUOTE_SEPARATOR_REPLY}{original.body}",
            attachments=tuple(attachments)
        )
        return self._fan_out(sender_user, draft, {recipient.email: recipient})

    def forward(self, original_message_id: int, sender: str, recipients, body=None, files=None) -> Dict[str, Any]:
        """
        Forward a message in the sender's mailbox, with its attachments

        Raises:
            MailValidationException: No recipients, or an unknown/unverified one
            MailNotFoundException: Original message not in the sender's mailbox
            AttachmentUploadException: Attachment upload failed, nothing stored
        """
        if not isinstance(recipients, list) or not recipients:
            raise MailValidationException("Recipients are required and must be an array")
        if body is not None and not isinstance(body, str):
            raise MailValidationException("Body must be a string")

        recipients = clean_addresses(recipients)
        if not recipients:
            raise MailValidationException("Recipients are required and must be an array")

        sender_user = self._get_sender(sender)
        original = self._get_original(sender_user.id, original_message_id)

        users = self._resolve_targets(recipients, [], [])

        # the original's attachments first, then the new ones
        attachments = [
            AttachmentRef(
                filename=attachment.filename,
                size=attachment.size,
                oss_bucket=attachment.oss_bucket,
                oss_key=attachment.oss_key,
                content_type=attachment.content_type
            )
            for attachment in get_attachments_by_message(original.id)
        ]
        attachments.extend(self.attachment_store.upload_files(sender_user.id, files))

        draft = MailDraft(
            sender=sender,
            recipients=tuple(recipients),
            subject=f"{SUBJECT_PREFIX_FORWARD}{original.subject}",
            body=f"{body or EMPTY_STRING}{QUOTE_SEPARATOR_FORWARD}{original.body}",
            attachments=tuple(attachments)
        )
        return self._fan_out(sender_user, draft, users)

    def save_draft(
            self,
            sender: str,
            recipients=None,
            cc=None,
            bcc=None,
            subject=None,
            body=None,
            files=None
    ) -> int:
        """
        Save a draft in the sender's draft folder. Nothing is delivered.

        Returns:
            Draft message ID
        """
        for name, addresses in (("Recipients", recipients), ("CC", cc), ("BCC", bcc)):
            if addresses is not None and not isinstance(addresses, list):
                raise MailValidationException(f"{name} must be an array")

        sender_user = self._get_sender(sender)
        attachments = self.attachment_store.upload_files(sender_user.id, files)

        draft = MailDraft(
            sender=sender,
            recipients=tuple(self._keep_strings(recipients)),
            cc=tuple(self._keep_strings(cc)),
            bcc=tuple(self._keep_strings(bcc)),
            subject=subject if isinstance(subject, str) else EMPTY_STRING,
            body=body if isinstance(body, str) else EMPTY_STRING,
            attachments=tuple(attachments)
        )

        now = get_now_timestamp_ms()
        with transaction.atomic(using=MAIL_DB_ALIAS):
            message = self._store_copy(sender_user.id, FolderEnum.DRAFT, draft, sent_at=0, draft_saved_at=now)

        logger.info(f"[MailFanoutService.save_draft] Saved draft: id={message.id}, sender={sender}")
        return message.id

    def _fan_out(
            self,
            sender_user: MailUser,
            draft: MailDraft,
            users: Dict[str, MailUser],
            is_spam: Optional[bool] = None,
            with_auto_reply: bool = False
    ) -> Dict[str, Any]:
        """
        Store the sent copy, then deliver one copy per target address

        Args:
            sender_user: Owner of the sent copy
            draft: Content of the send
            users: Verified users by address, covering every target
            is_spam: Verdict to use; classified when None
            with_auto_reply: Whether "To" recipients may auto-reply

        Returns:
            Summary dictionary
        """
        sent_at = get_now_timestamp_ms()

        with transaction.atomic(using=MAIL_DB_ALIAS):
            sent = self._store_copy(sender_user.id, FolderEnum.SENT, draft, sent_at=sent_at)

        if is_spam is None:
            is_spam = classify(draft, draft.sender)
        folder = FolderEnum.SPAM if is_spam else FolderEnum.INBOX

        spam_labels = {}
        delivered = 0
        failed = 0
        for index, address in enumerate(draft.targets()):
            owner = users.get(address)
            if owner is None:
                logger.warning(f"[MailFanoutService._fan_out] No mailbox for {address}, skipped")
                failed += 1
                continue

            try:
                label = None
                if is_spam:
                    label = spam_labels.get(address)
                    if label is None:
                        label = self.label_service.ensure_system_spam_label(owner.id)
                        spam_labels[address] = label

                with transaction.atomic(using=MAIL_DB_ALIAS):
                    copy = self._store_copy(owner.id, folder, draft, sent_at=sent_at, is_spam=is_spam)
                    if label is not None:
                        attach_label(copy.id, label.id)
            except Exception as e:
                logger.exception(f"[MailFanoutService._fan_out] Failed to deliver to {address}: {e}")
                failed += 1
                continue

            delivered += 1
            notification_service.notify_new_email(address, draft.sender, draft.subject, sent_at, is_spam)

            if with_auto_reply and not is_spam and index < len(draft.recipients):
                self._auto_reply(owner, sender_user, draft)

        logger.info(f"[MailFanoutService._fan_out] Sent: id={sent.id}, sender={draft.sender}, "
                    f"is_spam={is_spam}, delivered={delivered}, failed={failed}")

        return {
            'message_id': sent.id,
            'is_spam': is_spam,
            'delivered': delivered,
            'failed': failed,
        }

    def _auto_reply(self, responder: MailUser, original_sender: MailUser, original: MailDraft) -> bool:
        """Send the responder's auto-reply back to the original sender, if enabled"""
        try:
            if not responder.is_email_verified:
                return False
            message = self.auto_reply_service.get_enabled_message(responder.id)
            if message is None:
                return False

            reply = MailDraft(
                sender=responder.email,
                recipients=(original.sender,),
                subject=f"{SUBJECT_PREFIX_AUTO_REPLY}{original.subject}",
                body=message
            )
            self._fan_out(responder, reply, {original.sender: original_sender}, is_spam=False)
            return True
        except Exception as e:
            logger.exception(f"[MailFanoutService._auto_reply] Failed to auto-reply from {responder.email}: {e}")
            return False

    def _store_copy(
            self,
            owner_id: int,
            folder: FolderEnum,
            draft: MailDraft,
            sent_at: int,
            is_spam: bool = False,
            draft_saved_at: Optional[int] = None
    ) -> MailMessage:
        message = create_mail_message(
            owner_id=owner_id,
            folder=folder.value,
            from_address=draft.sender,
            to_addresses=implode(draft.recipients),
            cc_addresses=implode(draft.cc),
            bcc_addresses=implode(draft.bcc),
            subject=draft.subject,
            body=draft.body,
            is_spam=is_spam,
            sent_at=sent_at,
            draft_saved_at=draft_saved_at
        )
        for attachment in draft.attachments:
            create_mail_attachment(
                message_id=message.id,
                filename=attachment.filename,
                size=attachment.size,
                oss_bucket=attachment.oss_bucket,
                oss_key=attachment.oss_key,
                content_type=attachment.content_type
            )
        return message

    def _get_sender(self, sender: str) -> MailUser:
        sender_user = get_user_by_email(sender)
        if not sender_user:
            raise MailNotFoundException("Sender not found")
        return sender_user

    def _get_original(self, owner_id: int, message_id: int) -> MailMessage:
        original = get_owned_message(owner_id, message_id)
        if not original:
            raise MailNotFoundException("Email not found")
        return original

    def _resolve_targets(self, recipients: List[str], cc: List[str], bcc: List[str]) -> Dict[str, MailUser]:
        """
        Look up every target address with one query

        Raises:
            MailValidationException: Naming the first list with an unknown or unverified address
        """
        users = {
            user.email: user
            for user in get_verified_users_by_emails(unique_keep_order(recipients + cc + bcc))
        }
        for prefix, addresses in (("Some recipients", recipients),
                                  ("Some CC recipients", cc),
                                  ("Some BCC recipients", bcc)):
            if any(address not in users for address in addresses):
                logger.warning(f"[MailFanoutService._resolve_targets] {prefix} not found or unverified")
                raise MailValidationException(f"{prefix} not found or unverified")
        return users

    def _keep_strings(self, addresses) -> List[str]:
        if not addresses:
            return []
        return [address.strip() for address in addresses if isinstance(address, str) and not check_blank(address)]
