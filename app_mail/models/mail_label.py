from django.db import models


class MailLabel(models.Model):
    """User label, system labels (Spam) are managed by the platform"""
    id = models.BigAutoField(primary_key=True)

    # owner user ID (maintained by the application)
    owner_id = models.BigIntegerField(db_index=True)

    name = models.CharField(max_length=255)

    # system labels cannot be renamed or deleted
    is_system_label = models.BooleanField(default=False)

    # create time (UNIX timestamp, milliseconds)
    ct = models.BigIntegerField(default=0, db_index=True)

    # update time (UNIX timestamp, milliseconds)
    ut = models.BigIntegerField(default=0, db_index=True)

    class Meta:
        db_table = "mail_label"
        unique_together = [['owner_id', 'name', 'is_system_label']]
        indexes = [
            models.Index(fields=['owner_id', 'name']),
        ]
