from django.urls import path

from app_mail.views.auto_reply_view import AutoReplyView
from app_mail.views.label_view import LabelListView, LabelDetailView
from app_mail.views.mail_view import (
    MailSendView,
    MailDraftView,
    MailReplyView,
    MailForwardView,
)
from app_mail.views.mailbox_view import (
    FolderView,
    MailSearchView,
    MailDetailView,
    MailReadView,
    MailStarView,
    MailTrashView,
    MailLabelView,
)

# Every endpoint acts for the user in the path, who must own a verified address

urlpatterns = [
    # Composing
    path('users/<int:user_id>/mails/send', MailSendView.as_view(), name='mail-send'),
    path('users/<int:user_id>/mails/drafts', MailDraftView.as_view(), name='mail-draft'),
    path('users/<int:user_id>/mails/<int:message_id>/reply', MailReplyView.as_view(), name='mail-reply'),
    path('users/<int:user_id>/mails/<int:message_id>/forward', MailForwardView.as_view(), name='mail-forward'),
    # Mailbox
    path('users/<int:user_id>/folders/<str:folder>', FolderView.as_view(), name='mail-folder'),
    path('users/<int:user_id>/mails/search', MailSearchView.as_view(), name='mail-search'),
    path('users/<int:user_id>/mails/<int:message_id>', MailDetailView.as_view(), name='mail-detail'),
    path('users/<int:user_id>/mails/<int:message_id>/read', MailReadView.as_view(), name='mail-read'),
    path('users/<int:user_id>/mails/<int:message_id>/star', MailStarView.as_view(), name='mail-star'),
    path('users/<int:user_id>/mails/<int:message_id>/trash', MailTrashView.as_view(), name='mail-trash'),
    path('users/<int:user_id>/mails/<int:message_id>/labels', MailLabelView.as_view(), name='mail-labels'),
    # Labels
    path('users/<int:user_id>/labels', LabelListView.as_view(), name='label-list'),
    path('users/<int:user_id>/labels/<int:label_id>', LabelDetailView.as_view(), name='label-detail'),
    # Auto-reply
    path('users/<int:user_id>/auto-reply', AutoReplyView.as_view(), name='auto-reply'),
]
