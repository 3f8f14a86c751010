from django.db import models


class MessageLabel(models.Model):
    """Label attached to a message copy"""
    id = models.BigAutoField(primary_key=True)

    message_id = models.BigIntegerField(db_index=True)

    label_id = models.BigIntegerField(db_index=True)

    # create time (UNIX timestamp, milliseconds)
    ct = models.BigIntegerField(default=0)

    class Meta:
        db_table = "mail_message_label"
        unique_together = [['message_id', 'label_id']]
