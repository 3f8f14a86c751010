"""
Mail composing REST API views

Send, reply, forward and save drafts. Lists (recipients, cc, bcc) may be
JSON arrays or, in multipart requests, JSON-encoded strings. Files are sent
as "attachments".
"""
import logging

from rest_framework.views import APIView

from app_mail.exceptions.mail_exception import MailException
from app_mail.services.mail_fanout_service import MailFanoutService
from app_mail.views.view_helper import (
    get_acting_user,
    get_list_field,
    get_request_data,
    get_request_files,
    resp_mail_err,
)
from common.utils.http_util import resp_ok, resp_exception

logger = logging.getLogger(__name__)


class MailSendView(APIView):
    """Send a new message"""

    def post(self, request, user_id, *args, **kwargs):
        """
        Request body:
        {
            "recipients": ["a@example.com"],   # Required
            "cc": [],                          # Optional
            "bcc": [],                         # Optional
            "subject": "Hello",                # Required
            "body": "<p>Hi</p>"                # Required
        }
        """
        try:
            user = get_acting_user(user_id)
            data = get_request_data(request)

            service = MailFanoutService()
            result = service.send(
                sender=user.email,
                recipients=get_list_field(data, 'recipients'),
                cc=get_list_field(data, 'cc'),
                bcc=get_list_field(data, 'bcc'),
                subject=data.get('subject'),
                body=data.get('body'),
                files=get_request_files(request)
            )
            return resp_ok(result)

        except MailException as e:
            return resp_mail_err(e, "MailSendView.post")
        except Exception as e:
            logger.exception(f"[MailSendView.post] Error sending mail: {e}")
            return resp_exception(e)


class MailDraftView(APIView):
    """Save a draft"""

    def post(self, request, user_id, *args, **kwargs):
        try:
            user = get_acting_user(user_id)
            data = get_request_data(request)

            service = MailFanoutService()
            message_id = service.save_draft(
                sender=user.email,
                recipients=get_list_field(data, 'recipients'),
                cc=get_list_field(data, 'cc'),
                bcc=get_list_field(data, 'bcc'),
                subject=data.get('subject'),
                body=data.get('body'),
                files=get_request_files(request)
            )
            return resp_ok({'message_id': message_id})

        except MailException as e:
            return resp_mail_err(e, "MailDraftView.post")
        except Exception as e:
            logger.exception(f"[MailDraftView.post] Error saving draft: {e}")
            return resp_exception(e)


class MailReplyView(APIView):
    """Reply to a message of the user's mailbox"""

    def post(self, request, user_id, message_id, *args, **kwargs):
        """
        Request body:
        {
            "body": "<p>Thanks</p>"
        }
        """
        try:
            user = get_acting_user(user_id)
            data = get_request_data(request)

            service = MailFanoutService()
            result = service.reply(
                original_message_id=message_id,
                sender=user.email,
                body=data.get('body'),
                files=get_request_files(request)
            )
            return resp_ok(result)

        except MailException as e:
            return resp_mail_err(e, "MailReplyView.post")
        except Exception as e:
            logger.exception(f"[MailReplyView.post] Error replying: {e}")
            return resp_exception(e)


class MailForwardView(APIView):
    """Forward a message of the user's mailbox"""

    def post(self, request, user_id, message_id, *args, **kwargs):
        """
        Request body:
        {
            "recipients": ["b@example.com"],   # Required
            "body": "FYI"                      # Optional
        }
        """
        try:
            user = get_acting_user(user_id)
            data = get_request_data(request)

            service = MailFanoutService()
            result = service.forward(
                original_message_id=message_id,
                sender=user.email,
                recipients=get_list_field(data, 'recipients'),
                body=data.get('body'),
                files=get_request_files(request)
            )
            return resp_ok(result)

        except MailException as e:
            return resp_mail_err(e, "MailForwardView.post")
        except Exception as e:
            logger.exception(f"[MailForwardView.post] Error forwarding: {e}")
            return resp_exception(e)
