"""
Mail repositories

This module exports all repository functions for database operations.
"""
from app_mail.repos.mail_user_repo import (
    get_user_by_id,
    get_user_by_email,
    get_verified_user_by_email,
    get_verified_users_by_emails,
    create_user,
)
from app_mail.repos.mail_message_repo import (
    create_mail_message,
    get_owned_message,
    get_messages_by_owner,
    list_messages_by_folder,
    search_messages,
    update_owned_message,
    delete_mail_message,
)
from app_mail.repos.mail_attachment_repo import (
    create_mail_attachment,
    get_attachments_by_message,
    delete_attachments_by_message,
)
from app_mail.repos.mail_label_repo import (
    get_owned_label,
    get_labels_by_owner,
    get_label_by_owner_and_name,
    create_label,
    get_or_create_system_label,
    update_label_name,
    delete_label,
)
from app_mail.repos.message_label_repo import (
    attach_label,
    detach_label,
    detach_label_from_all,
    delete_links_by_message,
    get_labels_by_message,
    get_labels_by_messages,
)
from app_mail.repos.auto_reply_repo import (
    get_auto_reply_by_owner,
    create_auto_reply,
    update_auto_reply,
)

__all__ = [
    # Directory
    'get_user_by_id',
    'get_user_by_email',
    'get_verified_user_by_email',
    'get_verified_users_by_emails',
    'create_user',
    # Message store
    'create_mail_message',
    'get_owned_message',
    'get_messages_by_owner',
    'list_messages_by_folder',
    'search_messages',
    'update_owned_message',
    'delete_mail_message',
    'create_mail_attachment',
    'get_attachments_by_message',
    'delete_attachments_by_message',
    # Labels
    'get_owned_label',
    'get_labels_by_owner',
    'get_label_by_owner_and_name',
    'create_label',
    'get_or_create_system_label',
    'update_label_name',
    'delete_label',
    'attach_label',
    'detach_label',
    'detach_label_from_all',
    'delete_links_by_message',
    'get_labels_by_message',
    'get_labels_by_messages',
    # Auto-reply
    'get_auto_reply_by_owner',
    'create_auto_reply',
    'update_auto_reply',
]
