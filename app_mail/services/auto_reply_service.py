"""
Auto-reply service

Per-user auto-reply settings. Settings are created on first write and
updated in place afterwards.
"""
import logging
from typing import Dict, Any, Optional

from app_mail.exceptions.mail_validation_exception import MailValidationException
from app_mail.models.auto_reply import AutoReply
from app_mail.repos import (
    get_auto_reply_by_owner,
    create_auto_reply,
    update_auto_reply,
)
from common.components.singleton import Singleton

logger = logging.getLogger(__name__)


def _auto_reply_to_dict(auto_reply: AutoReply) -> Dict[str, Any]:
    return {
        'enabled': auto_reply.enabled,
        'message': auto_reply.message,
        'ut': auto_reply.ut,
    }


class AutoReplyService(Singleton):
    """Auto-reply service"""

    def get_auto_reply(self, owner_id: int) -> Optional[Dict[str, Any]]:
        """
        Get auto-reply settings of a user

        Returns:
            Settings dictionary, or None if never configured
        """
        auto_reply = get_auto_reply_by_owner(owner_id)
        if not auto_reply:
            return None
        return _auto_reply_to_dict(auto_reply)

    def get_enabled_message(self, owner_id: int) -> Optional[str]:
        """Reply text of a user whose auto-reply is on, None otherwise"""
        auto_reply = get_auto_reply_by_owner(owner_id)
        if auto_reply and auto_reply.enabled:
            return auto_reply.message
        return None

    def upsert_auto_reply(self, owner_id: int, enabled, message=None) -> Dict[str, Any]:
        """
        Create or update auto-reply settings

        Args:
            owner_id: Owner user ID
            enabled: Whether auto-reply is on
            message: Reply text; when empty on update, the previous text is kept

        Returns:
            Settings dictionary

        Raises:
            MailValidationException: If enabled is not a bool or message not a string
        """
        if not isinstance(enabled, bool):
            raise MailValidationException("Enabled must be a boolean")
        if message is not None and not isinstance(message, str):
            raise MailValidationException("Message must be a string")

        auto_reply = get_auto_reply_by_owner(owner_id)
        if auto_reply:
            fields = {'enabled': enabled}
            if message:
                fields['message'] = message
            auto_reply = update_auto_reply(auto_reply, **fields)
        else:
            auto_reply = create_auto_reply(owner_id, enabled, message or None)

        logger.info(f"[AutoReplyService.upsert_auto_reply] Saved auto-reply: owner_id={owner_id}, enabled={enabled}")
        return _auto_reply_to_dict(auto_reply)
