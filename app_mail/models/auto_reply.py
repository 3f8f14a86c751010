from django.db import models

from app_mail.consts.mail_const import DEFAULT_AUTO_REPLY_MESSAGE


class AutoReply(models.Model):
    """Auto-reply settings, at most one per user"""
    id = models.BigAutoField(primary_key=True)

    # owner user ID (maintained by the application)
    owner_id = models.BigIntegerField(unique=True)

    enabled = models.BooleanField(default=False)

    message = models.TextField(default=DEFAULT_AUTO_REPLY_MESSAGE)

    # create time (UNIX timestamp, milliseconds)
    ct = models.BigIntegerField(default=0)

    # update time (UNIX timestamp, milliseconds)
    ut = models.BigIntegerField(default=0)

    class Meta:
        db_table = "mail_auto_reply"
