class CheckedException(Exception):
    """
    Base of the exceptions the service raises on purpose.
    Views translate them into error codes; anything else is unexpected.
    """

    def __init__(self, message: str = ""):
        super(CheckedException, self).__init__(message)
        self.message = message

    def __str__(self):
        return self.message
