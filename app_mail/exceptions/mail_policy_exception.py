from app_mail.exceptions.mail_exception import MailException


class MailPolicyException(MailException):
    """Operation forbidden by a platform rule, e.g. touching a system label"""

    def __init__(self, message: str):
        super(MailPolicyException, self).__init__(message)
