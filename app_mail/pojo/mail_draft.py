from dataclasses import dataclass, field
from typing import Tuple

from common.consts.string_const import EMPTY_STRING


@dataclass(frozen=True)
class AttachmentRef:
    """An uploaded attachment, stored once and referenced by every copy"""
    filename: str
    size: int
    oss_bucket: str
    oss_key: str
    content_type: str = "application/octet-stream"

    @property
    def reference(self) -> str:
        return f"{self.oss_bucket}/{self.oss_key}"

    @property
    def extension(self) -> str:
        # a name without a dot is its own extension
        return self.filename.split('.')[-1].lower()


@dataclass(frozen=True)
class MailDraft:
    """
    Content of one logical send.
    Every stored copy is built from the same draft, lists are tuples so no
    copy can alter what another copy stores.
    """
    sender: str
    recipients: Tuple[str, ...] = field(default_factory=tuple)
    cc: Tuple[str, ...] = field(default_factory=tuple)
    bcc: Tuple[str, ...] = field(default_factory=tuple)
    subject: str = EMPTY_STRING
    body: str = EMPTY_STRING
    attachments: Tuple[AttachmentRef, ...] = field(default_factory=tuple)

    def targets(self) -> Tuple[str, ...]:
        """
        Target addresses in delivery order: recipients, then cc, then bcc.
        An address listed twice gets two copies.
        """
        return self.recipients + self.cc + self.bcc
