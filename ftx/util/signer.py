import hashlib
import hmac
import time

from .enums import Headers
from .request import Request


class HMACSign:
    """Sign requests with an HMAC-SHA256 of the request payload.

    The payload is the concatenation of the millisecond timestamp, the
    method, the request URL and, for a POST with a body, the JSON body.  The
    API secret is the HMAC key.

    Args:
        secret (str): The API secret.

    """

    def __init__(self, secret: str):
        self.secret = secret.encode("utf-8")

        assert self.secret, "The API secret can't be empty."

    def serialise(self, request: Request, timestamp: int) -> str:
        return f"{timestamp}{request.method}{request.url}{request.body or ''}"

    def sign(self, request: Request, timestamp: int=None) -> str:
        if timestamp is None:
            timestamp = int(time.time() * 1000)

        payload = self.serialise(request, timestamp)

        return hmac.new(
            self.secret, payload.encode("utf-8"), hashlib.sha256
        ).hexdigest()

    def headers(self, request: Request, api_key: str, timestamp: int=None) -> dict:
        """The authentication headers for `request`.

        The sub-account header isn't included, it's up to the caller.

        """
        if timestamp is None:
            timestamp = int(time.time() * 1000)

        return {
            Headers.KEY.value: api_key,
            Headers.TIMESTAMP.value: str(timestamp),
            Headers.SIGN.value: self.sign(request, timestamp)
        }
