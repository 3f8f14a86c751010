"""
Base exception for the mail application
"""

from common.exceptions.base_exception import CheckedException


class MailException(CheckedException):
    """Base exception for mail errors"""
    pass
