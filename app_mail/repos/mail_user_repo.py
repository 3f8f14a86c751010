"""
Mail user repository

Directory lookups of user identities, verified by email address.
Lookups propagate database faults, so None only ever means no matching user.
"""
import logging
from typing import Optional, List, Iterable

from app_mail.consts.mail_const import MAIL_DB_ALIAS
from app_mail.models.mail_user import MailUser
from common.utils.date_util import get_now_timestamp_ms

logger = logging.getLogger(__name__)


def get_user_by_id(user_id: int) -> Optional[MailUser]:
    """
    Get mail user by ID

    Args:
        user_id: MailUser ID

    Returns:
        MailUser instance or None if not found
    """
    try:
        return MailUser.objects.using(MAIL_DB_ALIAS).filter(id=user_id).first()
    except Exception as e:
        logger.exception(f"[get_user_by_id] Error getting user: {e}")
        raise


def get_user_by_email(email: str) -> Optional[MailUser]:
    """
    Get mail user by email address, verified or not

    Args:
        email: Email address

    Returns:
        MailUser instance or None if not found
    """
    if not email:
        return None
    try:
        return MailUser.objects.using(MAIL_DB_ALIAS).filter(email=email).first()
    except Exception as e:
        logger.exception(f"[get_user_by_email] Error getting user: {e}")
        raise


def get_verified_user_by_email(email: str) -> Optional[MailUser]:
    """
    Get the user owning a verified email address

    Args:
        email: Email address

    Returns:
        MailUser instance or None if absent or not verified

    Raises:
        DatabaseError: If the directory cannot be queried
    """
    if not email:
        return None
    try:
        return MailUser.objects.using(MAIL_DB_ALIAS).filter(
            email=email,
            is_email_verified=True
        ).first()
    except Exception as e:
        logger.exception(f"[get_verified_user_by_email] Error getting user: {e}")
        raise


def get_verified_users_by_emails(emails: Iterable[str]) -> List[MailUser]:
    """
    Get the users owning any of the given verified email addresses

    Args:
        emails: Email addresses (duplicates are ignored)

    Returns:
        List of MailUser instances, one per verified address found

    Raises:
        DatabaseError: If the directory cannot be queried
    """
    emails = set(emails)
    if not emails:
        return []
    try:
        return list(MailUser.objects.using(MAIL_DB_ALIAS).filter(
            email__in=emails,
            is_email_verified=True
        ))
    except Exception as e:
        logger.exception(f"[get_verified_users_by_emails] Error getting users: {e}")
        raise


def create_user(
        phone: str,
        email: Optional[str] = None,
        name: str = '',
        is_email_verified: bool = False
) -> MailUser:
    """
    Create a new mail user

    Args:
        phone: Phone number (unique)
        email: Email address (unique, optional)
        name: Display name
        is_email_verified: Whether the email address is verified

    Returns:
        Created MailUser instance
    """
    try:
        now = get_now_timestamp_ms()
        return MailUser.objects.using(MAIL_DB_ALIAS).create(
            phone=phone,
            email=email,
            name=name,
            is_email_verified=is_email_verified,
            ct=now,
            ut=now
        )
    except Exception as e:
        logger.exception(f"[create_user] Error creating user: {e}")
        raise
