"""
Label REST API views
"""
import logging

from rest_framework.views import APIView

from app_mail.exceptions.mail_exception import MailException
from app_mail.services.mail_label_service import MailLabelService
from app_mail.views.view_helper import get_acting_user, get_request_data, resp_mail_err
from common.utils.http_util import resp_ok, resp_exception

logger = logging.getLogger(__name__)


class LabelListView(APIView):
    """List and create labels of a user"""

    def get(self, request, user_id, *args, **kwargs):
        try:
            user = get_acting_user(user_id)
            return resp_ok(MailLabelService().list_labels(user.id))
        except MailException as e:
            return resp_mail_err(e, "LabelListView.get")
        except Exception as e:
            logger.exception(f"[LabelListView.get] Error listing labels: {e}")
            return resp_exception(e)

    def post(self, request, user_id, *args, **kwargs):
        """
        Request body:
        {
            "name": "Work"       # Required
        }
        """
        try:
            user = get_acting_user(user_id)
            name = get_request_data(request).get('name')
            return resp_ok(MailLabelService().create_label(user.id, name))
        except MailException as e:
            return resp_mail_err(e, "LabelListView.post")
        except Exception as e:
            logger.exception(f"[LabelListView.post] Error creating label: {e}")
            return resp_exception(e)


class LabelDetailView(APIView):
    """Rename or delete a label"""

    def patch(self, request, user_id, label_id, *args, **kwargs):
        try:
            user = get_acting_user(user_id)
            name = get_request_data(request).get('name')
            return resp_ok(MailLabelService().rename_label(user.id, label_id, name))
        except MailException as e:
            return resp_mail_err(e, "LabelDetailView.patch")
        except Exception as e:
            logger.exception(f"[LabelDetailView.patch] Error renaming label: {e}")
            return resp_exception(e)

    def delete(self, request, user_id, label_id, *args, **kwargs):
        try:
            user = get_acting_user(user_id)
            MailLabelService().delete_label(user.id, label_id)
            return resp_ok({'deleted': True})
        except MailException as e:
            return resp_mail_err(e, "LabelDetailView.delete")
        except Exception as e:
            logger.exception(f"[LabelDetailView.delete] Error deleting label: {e}")
            return resp_exception(e)
