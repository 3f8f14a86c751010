SPAM_KEYWORDS = (
    'win a prize',
    'free offer',
    'click here',
    'urgent',
    'limited time offer',
    'make money fast',
    'lottery',
    'guaranteed',
    'viagra',
    'cheap pills',
)

URL_PATTERN = r'https?://[^\s<>"\']+'

# more links than this in the body is spam
MAX_LINKS = 5

# more "To" recipients than this is spam
MAX_RECIPIENTS = 10

# 5 MiB
MAX_ATTACHMENT_SIZE = 5 * 1024 * 1024

ALLOWED_ATTACHMENT_EXTENSIONS = frozenset({'jpg', 'jpeg', 'png', 'pdf'})
