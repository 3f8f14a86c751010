from django.db import models

from app_mail.enums.folder_enum import FolderEnum


class MailMessage(models.Model):
    """
    One stored copy of a message, held in the mailbox of its owner.
    A logical send produces a sent copy for the sender and one copy per target address.
    """
    id = models.BigAutoField(primary_key=True)

    # owner user ID, whose mailbox holds this copy (maintained by the application)
    owner_id = models.BigIntegerField(db_index=True)

    # folder of this copy
    folder = models.CharField(max_length=16, choices=FolderEnum.choices(), default=FolderEnum.INBOX.value)

    # sender
    from_address = models.CharField(max_length=255, db_column='from')

    # recipients (comma-separated, same on every copy of one send)
    to_addresses = models.TextField(default="", db_column='to')

    # cc (comma-separated)
    cc_addresses = models.TextField(default="", db_column='cc')

    # bcc (comma-separated)
    bcc_addresses = models.TextField(default="", db_column='bcc')

    subject = models.TextField(default="")

    # rich-text (HTML) body
    body = models.TextField(default="")

    is_read = models.BooleanField(default=False)

    is_starred = models.BooleanField(default=False)

    is_spam = models.BooleanField(default=False)

    # send time (UNIX timestamp, milliseconds)
    sent_at = models.BigIntegerField(default=0, db_index=True)

    # draft save time (UNIX timestamp, milliseconds)
    draft_saved_at = models.BigIntegerField(null=True, blank=True)

    # create time (UNIX timestamp, milliseconds)
    ct = models.BigIntegerField(default=0, db_index=True)

    # update time (UNIX timestamp, milliseconds)
    ut = models.BigIntegerField(default=0, db_index=True)

    class Meta:
        db_table = "mail_message"
        indexes = [
            models.Index(fields=['owner_id', 'folder', 'sent_at']),
            models.Index(fields=['owner_id', 'is_starred']),
        ]
