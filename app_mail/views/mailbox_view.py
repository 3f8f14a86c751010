"""
Mailbox REST API views

Views are responsible for HTTP request/response handling only.
Business logic is handled by MailboxService.
"""
import logging

from rest_framework.views import APIView

from app_mail.exceptions.mail_exception import MailException
from app_mail.services.mailbox_service import MailboxService
from app_mail.views.view_helper import get_acting_user, get_request_data, resp_mail_err
from common.consts.query_const import LIMIT_PAGE
from common.consts.response_const import RET_INVALID_PARAM
from common.utils.date_util import get_timestamp_ms_of_iso_str
from common.utils.http_util import resp_ok, resp_err, resp_exception, with_type

logger = logging.getLogger(__name__)


class FolderView(APIView):
    """List the messages of a folder"""

    def get(self, request, user_id, folder, *args, **kwargs):
        """
        URL parameters:
        - folder: inbox, sent, draft, starred, trash or spam

        Query parameters:
        - label_id: Only messages with this label (optional)
        - offset: Pagination offset (default: 0)
        - limit: Pagination limit (default: 20, max: 1000)
        """
        try:
            user = get_acting_user(user_id)

            label_id = with_type(request.GET.get("label_id"))
            offset = with_type(request.GET.get("offset", 0))
            limit = with_type(request.GET.get("limit", LIMIT_PAGE))
            if label_id is not None and not isinstance(label_id, int):
                return resp_err("Invalid label ID", code=RET_INVALID_PARAM)
            if not isinstance(offset, int) or not isinstance(limit, int):
                return resp_err("Invalid pagination parameters", code=RET_INVALID_PARAM)

            service = MailboxService()
            page_data = service.list_folder(user.id, folder, label_id=label_id, offset=offset, limit=limit)
            return resp_ok(page_data)

        except MailException as e:
            return resp_mail_err(e, "FolderView.get")
        except Exception as e:
            logger.exception(f"[FolderView.get] Error listing folder: {e}")
            return resp_exception(e)


class MailSearchView(APIView):
    """Search the user's messages outside the trash"""

    def get(self, request, user_id, *args, **kwargs):
        """
        Query parameters (all optional):
        - keyword: In subject or body
        - from: Part of the sender address
        - to: Part of a to or cc address
        - has_attachment: true/false
        - start_date, end_date: ISO-8601 dates
        """
        try:
            user = get_acting_user(user_id)

            start_date = request.GET.get("start_date")
            end_date = request.GET.get("end_date")
            start_ms = get_timestamp_ms_of_iso_str(start_date) if start_date else None
            end_ms = get_timestamp_ms_of_iso_str(end_date) if end_date else None

            service = MailboxService()
            result = service.search(
                user.id,
                keyword=request.GET.get("keyword"),
                from_address=request.GET.get("from"),
                to_address=request.GET.get("to"),
                has_attachment=with_type(request.GET.get("has_attachment")) is True,
                start_ms=start_ms,
                end_ms=end_ms
            )
            return resp_ok(result)

        except ValueError as e:
            logger.warning(f"[MailSearchView.get] Validation error: {e}")
            return resp_err("Invalid date format", code=RET_INVALID_PARAM)
        except MailException as e:
            return resp_mail_err(e, "MailSearchView.get")
        except Exception as e:
            logger.exception(f"[MailSearchView.get] Error searching: {e}")
            return resp_exception(e)


class MailDetailView(APIView):
    """Get or permanently delete a message"""

    def get(self, request, user_id, message_id, *args, **kwargs):
        try:
            user = get_acting_user(user_id)
            return resp_ok(MailboxService().get_message(user.id, message_id))
        except MailException as e:
            return resp_mail_err(e, "MailDetailView.get")
        except Exception as e:
            logger.exception(f"[MailDetailView.get] Error getting message: {e}")
            return resp_exception(e)

    def delete(self, request, user_id, message_id, *args, **kwargs):
        try:
            user = get_acting_user(user_id)
            MailboxService().delete_message(user.id, message_id)
            return resp_ok({'deleted': True})
        except MailException as e:
            return resp_mail_err(e, "MailDetailView.delete")
        except Exception as e:
            logger.exception(f"[MailDetailView.delete] Error deleting message: {e}")
            return resp_exception(e)


class MailReadView(APIView):
    """Mark a message read or unread"""

    def patch(self, request, user_id, message_id, *args, **kwargs):
        """
        Request body:
        {
            "is_read": true
        }
        """
        try:
            user = get_acting_user(user_id)
            is_read = with_type(get_request_data(request).get('is_read'))
            MailboxService().mark_read(user.id, message_id, is_read)
            return resp_ok({'is_read': is_read})
        except MailException as e:
            return resp_mail_err(e, "MailReadView.patch")
        except Exception as e:
            logger.exception(f"[MailReadView.patch] Error updating read status: {e}")
            return resp_exception(e)


class MailStarView(APIView):
    """Star or unstar a message"""

    def patch(self, request, user_id, message_id, *args, **kwargs):
        """
        Request body:
        {
            "is_starred": true
        }
        """
        try:
            user = get_acting_user(user_id)
            is_starred = with_type(get_request_data(request).get('is_starred'))
            return resp_ok(MailboxService().star(user.id, message_id, is_starred))
        except MailException as e:
            return resp_mail_err(e, "MailStarView.patch")
        except Exception as e:
            logger.exception(f"[MailStarView.patch] Error starring message: {e}")
            return resp_exception(e)


class MailTrashView(APIView):
    """Move a message to the trash"""

    def patch(self, request, user_id, message_id, *args, **kwargs):
        try:
            user = get_acting_user(user_id)
            MailboxService().move_to_trash(user.id, message_id)
            return resp_ok({'folder': 'trash'})
        except MailException as e:
            return resp_mail_err(e, "MailTrashView.patch")
        except Exception as e:
            logger.exception(f"[MailTrashView.patch] Error moving to trash: {e}")
            return resp_exception(e)


class MailLabelView(APIView):
    """Add a label to a message or remove it"""

    def patch(self, request, user_id, message_id, *args, **kwargs):
        """
        Request body:
        {
            "label_id": 1,
            "action": "add"        # add or remove
        }
        """
        try:
            user = get_acting_user(user_id)
            data = get_request_data(request)

            label_id = with_type(data.get('label_id'))
            if not isinstance(label_id, int) or isinstance(label_id, bool):
                return resp_err("Invalid label ID", code=RET_INVALID_PARAM)

            MailboxService().update_message_label(user.id, message_id, label_id, data.get('action'))
            return resp_ok({'label_id': label_id, 'action': data.get('action')})
        except MailException as e:
            return resp_mail_err(e, "MailLabelView.patch")
        except Exception as e:
            logger.exception(f"[MailLabelView.patch] Error updating message labels: {e}")
            return resp_exception(e)
