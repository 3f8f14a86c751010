from app_mail.exceptions.mail_exception import MailException


class MailValidationException(MailException):
    """
    Malformed or missing input, unknown or unverified addresses.
    Raised before anything is written.
    """

    def __init__(self, message: str):
        super(MailValidationException, self).__init__(message)
