# database alias of every mail table
MAIL_DB_ALIAS = 'mail_rw'

# subject prefixes
SUBJECT_PREFIX_REPLY = "Re: "
SUBJECT_PREFIX_FORWARD = "Fwd: "
SUBJECT_PREFIX_AUTO_REPLY = "Auto Reply: "

# separators between the new text and the quoted original body
QUOTE_SEPARATOR_REPLY = "<br><br>--- Original Message ---<br>"
QUOTE_SEPARATOR_FORWARD = "<br><br>--- Forwarded Message ---<br>"

# system label attached to every copy that lands in the spam folder
SPAM_LABEL_NAME = "Spam"

DEFAULT_AUTO_REPLY_MESSAGE = "Thank you for your email. I am currently unavailable and will respond soon."

# same shape the directory accepts when an email address is registered
EMAIL_ADDRESS_PATTERN = r'^[\w.-]+@([\w-]+\.)+[\w-]{2,}$'

# real-time notification
NOTIFY_EVENT_NEW_EMAIL = "newEmail"
NOTIFY_MESSAGE_TYPE = "mail.event"
NOTIFY_GROUP_PREFIX = "mail_"

LABEL_ACTION_ADD = "add"
LABEL_ACTION_REMOVE = "remove"
