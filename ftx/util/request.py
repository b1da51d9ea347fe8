import json

from .helpers import to_query_string


class Request:

    __slots__ = [
        "host",
        "method",
        "params",
        "path",
        "payload"
    ]

    def __init__(
        self,
        method: str,
        host: str,
        path: str,
        *,
        params: dict=None,
        payload: dict=None
    ):
        self.host = getattr(host, "value", host)
        self.method = method.upper()
        self.params = params
        self.path = getattr(path, "value", path)
        self.payload = payload

    def __repr__(self) -> str:
        return f"<method='{self.method}' url='{self.url}'>"

    @property
    def url(self) -> str:
        """The full URL, query string included.

        This is also the `path` component of the signature payload.

        """
        query = to_query_string(self.params or {})

        if query:
            return f"{self.host}{self.path}?{query}"

        return self.host + self.path

    @property
    def body(self) -> str:
        """The JSON text sent with a POST, or `None` for anything else.

        The signature covers exactly this text, so it's also what goes out on
        the wire.

        """
        if self.method != "POST" or not self.payload:
            return None

        if isinstance(self.payload, str):
            return self.payload

        return json.dumps(self.payload, separators=(",", ":"))
