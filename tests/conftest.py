import json

import pytest

import ftx


class FakeResponse:

    def __init__(self, status: int=200, content=None, reason: str="OK"):
        if not isinstance(content, bytes):
            content = json.dumps(content if content is not None else {"success": True, "result": []}).encode()

        self.content = content
        self.reason = reason
        self.status = status

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def read(self) -> bytes:
        return self.content


class FakeSession:
    """Stands in for :class:`aiohttp.ClientSession`, recording every request."""

    def __init__(self, response: FakeResponse=None, error: Exception=None):
        self.calls = []
        self.closed = False
        self.error = error
        self.response = response or FakeResponse()

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})

        if self.error:
            raise self.error

        return self.response

    async def close(self):
        self.closed = True

    @property
    def last_url(self) -> str:
        return self.calls[-1]["url"]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return ftx.Client(api_key="key", api_secret="secret", session=session)
