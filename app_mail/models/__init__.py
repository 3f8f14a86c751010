from app_mail.models.mail_user import MailUser
from app_mail.models.mail_message import MailMessage
from app_mail.models.mail_attachment import MailAttachment
from app_mail.models.mail_label import MailLabel
from app_mail.models.message_label import MessageLabel
from app_mail.models.auto_reply import AutoReply

__all__ = [
    'MailUser',
    'MailMessage',
    'MailAttachment',
    'MailLabel',
    'MessageLabel',
    'AutoReply',
]
