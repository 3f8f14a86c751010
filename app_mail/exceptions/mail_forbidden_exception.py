from app_mail.exceptions.mail_exception import MailException


class MailForbiddenException(MailException):
    """Acting user may not use the mailbox, e.g. email not verified"""

    def __init__(self, message: str):
        super(MailForbiddenException, self).__init__(message)
