"""
Helpers shared by the mail views
"""
import logging

from app_mail.exceptions.attachment_upload_exception import AttachmentUploadException
from app_mail.exceptions.mail_exception import MailException
from app_mail.exceptions.mail_forbidden_exception import MailForbiddenException
from app_mail.exceptions.mail_not_found_exception import MailNotFoundException
from app_mail.exceptions.mail_policy_exception import MailPolicyException
from app_mail.exceptions.mail_validation_exception import MailValidationException
from app_mail.models.mail_user import MailUser
from app_mail.repos import get_user_by_id
from common.consts.response_const import (
    RET_ERR,
    RET_INVALID_PARAM,
    RET_FORBIDDEN,
    RET_RESOURCE_NOT_FOUND,
    RET_OPERATION_NOT_ALLOWED,
    RET_OBJECT_STORAGE_ERROR,
)
from common.utils.http_util import resp_err, with_json_list

logger = logging.getLogger(__name__)

_EXCEPTION_CODES = (
    (MailValidationException, RET_INVALID_PARAM),
    (MailNotFoundException, RET_RESOURCE_NOT_FOUND),
    (MailForbiddenException, RET_FORBIDDEN),
    (MailPolicyException, RET_OPERATION_NOT_ALLOWED),
    (AttachmentUploadException, RET_OBJECT_STORAGE_ERROR),
)


def get_acting_user(user_id: int) -> MailUser:
    """
    The user a request acts for, who must own a verified address

    Raises:
        MailNotFoundException: If the user does not exist
        MailForbiddenException: If the user's email is not verified
    """
    user = get_user_by_id(user_id)
    if not user:
        raise MailNotFoundException("User not found")
    if not user.email or not user.is_email_verified:
        raise MailForbiddenException("Verified email required to perform this action")
    return user


def resp_mail_err(e: MailException, where: str):
    """Answer a mail exception with its error code"""
    code = RET_ERR
    for exception_class, exception_code in _EXCEPTION_CODES:
        if isinstance(e, exception_class):
            code = exception_code
            break
    logger.warning(f"[{where}] {type(e).__name__}: {e}")
    return resp_err(str(e), code=code)


def get_request_data(request):
    data = getattr(request, "data", None)
    if data is None:
        data = request.POST
    return data


def get_request_files(request):
    return request.FILES.getlist("attachments")


def get_list_field(data, name: str):
    """
    A list field of the request, multipart forms send it as a JSON string

    Raises:
        MailValidationException: If the field is not valid JSON
    """
    try:
        return with_json_list(data.get(name))
    except ValueError as e:
        raise MailValidationException(f"Invalid JSON format in {name}") from e
