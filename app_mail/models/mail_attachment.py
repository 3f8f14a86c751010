from django.db import models


class MailAttachment(models.Model):
    """Attachment of one stored message copy"""
    id = models.BigAutoField(primary_key=True)

    # message ID (maintained by the application)
    message_id = models.BigIntegerField(db_index=True)

    # display name
    filename = models.CharField(max_length=512)

    # MIME type
    content_type = models.CharField(max_length=255, default="application/octet-stream")

    # size in bytes
    size = models.BigIntegerField(default=0)

    # object storage location
    oss_bucket = models.CharField(max_length=255)
    oss_key = models.CharField(max_length=1024)

    # create time (UNIX timestamp, milliseconds)
    ct = models.BigIntegerField(default=0, db_index=True)

    class Meta:
        db_table = "mail_attachment"
        indexes = [
            models.Index(fields=['message_id']),
        ]

    @property
    def reference(self) -> str:
        return f"{self.oss_bucket}/{self.oss_key}"
