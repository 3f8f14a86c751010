"""
Spam classifier

Decides whether one logical send is spam. The verdict is computed once per
send and shared by every stored copy. Rules are evaluated in order and the
first match wins:

1. a spam keyword in the subject or the body
2. too many links in the body
3. a sender without a verified address
4. too many "To" recipients
5. an attachment that is too large or of a type not allowed
"""
import logging
import re

from app_mail.consts.spam_const import (
    SPAM_KEYWORDS,
    URL_PATTERN,
    MAX_LINKS,
    MAX_RECIPIENTS,
    MAX_ATTACHMENT_SIZE,
    ALLOWED_ATTACHMENT_EXTENSIONS,
)
from app_mail.pojo.mail_draft import MailDraft
from app_mail.repos import get_verified_user_by_email

logger = logging.getLogger(__name__)

_url_regex = re.compile(URL_PATTERN)


def has_spam_keyword(subject: str, body: str) -> bool:
    text = f"{subject or ''} {body or ''}".lower()
    return any(keyword in text for keyword in SPAM_KEYWORDS)


def count_links(body: str) -> int:
    """Every URL occurrence counts, repeated ones included"""
    return len(_url_regex.findall(body or ''))


def has_suspicious_attachment(draft: MailDraft) -> bool:
    for attachment in draft.attachments:
        if attachment.size > MAX_ATTACHMENT_SIZE:
            return True
        if attachment.extension not in ALLOWED_ATTACHMENT_EXTENSIONS:
            return True
    return False


def classify(draft: MailDraft, sender: str) -> bool:
    """
    Classify a send

    Args:
        draft: Content of the send
        sender: Sender email address

    Returns:
        True if spam. Any internal fault yields False.
    """
    try:
        if has_spam_keyword(draft.subject, draft.body):
            logger.info(f"[classify] Spam keyword found, sender={sender}")
            return True

        if count_links(draft.body) > MAX_LINKS:
            logger.info(f"[classify] Too many links, sender={sender}")
            return True

        if get_verified_user_by_email(sender) is None:
            logger.info(f"[classify] Sender not verified, sender={sender}")
            return True

        if len(draft.recipients) > MAX_RECIPIENTS:
            logger.info(f"[classify] Too many recipients, sender={sender}")
            return True

        if has_suspicious_attachment(draft):
            logger.info(f"[classify] Suspicious attachment, sender={sender}")
            return True

        return False
    except Exception as e:
        logger.exception(f"[classify] Error classifying mail from {sender}: {e}")
        return False
