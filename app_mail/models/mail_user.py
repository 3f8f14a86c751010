from django.db import models


class MailUser(models.Model):
    """Mail user (directory identity)"""
    id = models.BigAutoField(primary_key=True)

    # phone number, the login identity
    phone = models.CharField(max_length=32, unique=True)

    # email address, optional at registration
    email = models.CharField(max_length=255, unique=True, null=True, blank=True)

    # display name
    name = models.CharField(max_length=255, default="", blank=True)

    # whether the email address has been verified
    is_email_verified = models.BooleanField(default=False)

    # create time (UNIX timestamp, milliseconds)
    ct = models.BigIntegerField(default=0, db_index=True)

    # update time (UNIX timestamp, milliseconds)
    ut = models.BigIntegerField(default=0, db_index=True)

    class Meta:
        db_table = "mail_user"
        indexes = [
            models.Index(fields=['email', 'is_email_verified']),
        ]
