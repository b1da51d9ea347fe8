class FTXError(Exception):
    """The default base class for all FTX exceptions."""
    pass


class InvalidArguments(FTXError):

    def __init__(self, message: str=None):
        if not message:
            message = "Invalid arguments supplied."
        super().__init__(message)


class RateLimited(FTXError):

    status = 429

    def __init__(self, message: str=None):
        if not message:
            message = "Too many requests"
        super().__init__(message)


class RequestFailed(FTXError):
    """The request couldn't be completed.

    Wraps any transport-level failure or non-2xx response other than a 429,
    keeping the original reason as the message.

    Attributes:
        status (int): The HTTP status code, or `None` if no response was \
            received at all (connection errors, timeouts, etc.).

    """

    def __init__(self, message: str=None, status: int=None):
        if not message:
            message = "Request failed."
        self.status = status
        super().__init__(message)
