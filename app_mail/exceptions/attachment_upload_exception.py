from app_mail.exceptions.mail_exception import MailException


class AttachmentUploadException(MailException):
    def __init__(self, message: str):
        super(AttachmentUploadException, self).__init__(message)
