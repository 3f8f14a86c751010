from app_mail.services.attachment_store_service import AttachmentStoreService
from app_mail.services.auto_reply_service import AutoReplyService
from app_mail.services.mail_label_service import MailLabelService
from app_mail.services.mail_fanout_service import MailFanoutService
from app_mail.services.mailbox_service import MailboxService

__all__ = [
    'AttachmentStoreService',
    'AutoReplyService',
    'MailLabelService',
    'MailFanoutService',
    'MailboxService',
]
