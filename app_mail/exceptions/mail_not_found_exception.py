from app_mail.exceptions.mail_exception import MailException


class MailNotFoundException(MailException):
    def __init__(self, message: str):
        super(MailNotFoundException, self).__init__(message)
