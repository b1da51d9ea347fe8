from typing import NamedTuple, Optional

from .util.enums import Endpoints


class ClientConfig(NamedTuple):
    """The configuration a :class:`~ftx.client.Client` is built from.

    Attributes:
        api_key (str): The API Key, sent in the `FTX-KEY` header.
        api_secret (str): The secret used to sign requests.  Public endpoints
            can be used without one, in which case requests go out unsigned.
        subaccount (str): A sub-account to route every request to.
        endpoint (str): The base URL of the API.  Defaults to
            :attr:`~ftx.util.enums.Endpoints.MAINNET`.
        timeout (float): The total number of seconds a single request may
            take before it's abandoned.  `None` disables the timeout.

    """

    api_key: str
    api_secret: Optional[str] = None
    subaccount: Optional[str] = None
    endpoint: str = Endpoints.MAINNET.value
    timeout: Optional[float] = 30
