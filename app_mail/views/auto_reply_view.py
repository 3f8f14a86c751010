"""
Auto-reply settings REST API view
"""
import logging

from rest_framework.views import APIView

from app_mail.exceptions.mail_exception import MailException
from app_mail.services.auto_reply_service import AutoReplyService
from app_mail.views.view_helper import get_acting_user, get_request_data, resp_mail_err
from common.utils.http_util import resp_ok, resp_exception, with_type

logger = logging.getLogger(__name__)


class AutoReplyView(APIView):
    """Read and write auto-reply settings"""

    def get(self, request, user_id, *args, **kwargs):
        """Settings, or null if never configured"""
        try:
            user = get_acting_user(user_id)
            return resp_ok(AutoReplyService().get_auto_reply(user.id))
        except MailException as e:
            return resp_mail_err(e, "AutoReplyView.get")
        except Exception as e:
            logger.exception(f"[AutoReplyView.get] Error getting auto-reply: {e}")
            return resp_exception(e)

    def put(self, request, user_id, *args, **kwargs):
        """
        Request body:
        {
            "enabled": true,                        # Required
            "message": "I am away until Monday"     # Optional, keeps the previous text when empty
        }
        """
        try:
            user = get_acting_user(user_id)
            data = get_request_data(request)

            result = AutoReplyService().upsert_auto_reply(
                user.id,
                enabled=with_type(data.get('enabled')),
                message=data.get('message')
            )
            return resp_ok(result)
        except MailException as e:
            return resp_mail_err(e, "AutoReplyView.put")
        except Exception as e:
            logger.exception(f"[AutoReplyView.put] Error saving auto-reply: {e}")
            return resp_exception(e)
