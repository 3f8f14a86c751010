from enum import Enum
from typing import Optional


class FolderEnum(Enum):
    INBOX = 'inbox'
    SENT = 'sent'
    DRAFT = 'draft'
    STARRED = 'starred'
    TRASH = 'trash'
    SPAM = 'spam'

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional['FolderEnum']:
        """
        Resolve a folder by its name, None if unknown

        @param name: folder name, e.g. "inbox"
        @return: FolderEnum or None
        """
        if not name:
            return None
        for folder in cls:
            if folder.value == name:
                return folder
        return None

    @classmethod
    def choices(cls):
        return [(folder.value, folder.value) for folder in cls]
