"""
Mail label service

This service handles business logic for labels:
- Per-user label CRUD
- The system "Spam" label, created on first use
- Protection of system labels
"""
import logging
from typing import Dict, Any, List

from django.db import transaction

from app_mail.consts.mail_const import MAIL_DB_ALIAS, SPAM_LABEL_NAME
from app_mail.exceptions.mail_not_found_exception import MailNotFoundException
from app_mail.exceptions.mail_policy_exception import MailPolicyException
from app_mail.exceptions.mail_validation_exception import MailValidationException
from app_mail.models.mail_label import MailLabel
from app_mail.repos import (
    get_owned_label,
    get_labels_by_owner,
    get_label_by_owner_and_name,
    create_label,
    get_or_create_system_label,
    update_label_name,
    delete_label,
    detach_label_from_all,
)
from common.components.singleton import Singleton
from common.utils.string_util import check_blank

logger = logging.getLogger(__name__)


def label_to_dict(label: MailLabel) -> Dict[str, Any]:
    return {
        'id': label.id,
        'name': label.name,
        'is_system_label': label.is_system_label,
        'ct': label.ct,
        'ut': label.ut,
    }


class MailLabelService(Singleton):
    """Mail label service"""

    def ensure_system_spam_label(self, owner_id: int) -> MailLabel:
        """
        Get the system Spam label of a user, creating it on first use.
        Concurrent callers get the same label.

        Args:
            owner_id: Owner user ID

        Returns:
            MailLabel instance
        """
        label, created = get_or_create_system_label(owner_id, SPAM_LABEL_NAME)
        if created:
            logger.info(f"[MailLabelService.ensure_system_spam_label] Created Spam label for user {owner_id}")
        return label

    def list_labels(self, owner_id: int) -> List[Dict[str, Any]]:
        return [label_to_dict(label) for label in get_labels_by_owner(owner_id)]

    def create_label(self, owner_id: int, name: str) -> Dict[str, Any]:
        """
        Create a user label

        Args:
            owner_id: Owner user ID
            name: Label name, unique among the owner's labels

        Returns:
            Label dictionary

        Raises:
            MailValidationException: If name is blank or already used
            MailPolicyException: If name is reserved for a system label
        """
        name = self._check_name(name)
        if get_label_by_owner_and_name(owner_id, name):
            raise MailValidationException("Label name already exists")

        label = create_label(owner_id, name)
        logger.info(f"[MailLabelService.create_label] Created label: id={label.id}, owner_id={owner_id}")
        return label_to_dict(label)

    def rename_label(self, owner_id: int, label_id: int, name: str) -> Dict[str, Any]:
        """
        Rename a user label

        Raises:
            MailValidationException: If name is blank or already used
            MailNotFoundException: If the label is not the owner's
            MailPolicyException: If the label is a system label or the name is reserved
        """
        name = self._check_name(name)
        label = self._get_user_label(owner_id, label_id, "Cannot modify system label")

        existing = get_label_by_owner_and_name(owner_id, name)
        if existing and existing.id != label.id:
            raise MailValidationException("Label name already exists")

        update_label_name(label.id, name)
        label.name = name
        logger.info(f"[MailLabelService.rename_label] Renamed label: id={label.id}, owner_id={owner_id}")
        return label_to_dict(label)

    def delete_label(self, owner_id: int, label_id: int) -> bool:
        """
        Delete a user label and detach it from every message.
        The messages themselves are kept.

        Raises:
            MailNotFoundException: If the label is not the owner's
            MailPolicyException: If the label is a system label
        """
        label = self._get_user_label(owner_id, label_id, "Cannot delete system label")

        with transaction.atomic(using=MAIL_DB_ALIAS):
            detached = detach_label_from_all(label.id)
            delete_label(label.id)

        logger.info(f"[MailLabelService.delete_label] Deleted label: id={label.id}, detached={detached}")
        return True

    def _check_name(self, name) -> str:
        if not isinstance(name, str) or check_blank(name):
            raise MailValidationException("Label name is required")
        name = name.strip()
        # system label names are never available to user labels
        if name == SPAM_LABEL_NAME:
            raise MailPolicyException("Label name is reserved")
        return name

    def _get_user_label(self, owner_id: int, label_id: int, system_label_message: str) -> MailLabel:
        label = get_owned_label(owner_id, label_id)
        if not label:
            raise MailNotFoundException("Label not found or unauthorized")
        if label.is_system_label:
            logger.warning(f"[MailLabelService] Refused on system label: id={label.id}, owner_id={owner_id}")
            raise MailPolicyException(system_label_message)
        return label
