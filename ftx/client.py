import asyncio
import json
import logging
import urllib.parse
from collections.abc import Mapping
from typing import Any, Dict, List, Union

import aiohttp

from .config import ClientConfig
from .errors import *
from .util.enums import Headers
from .util.enums import Methods as METHOD
from .util.enums import Paths as PATH
from .util.helpers import NUMBER, assert_params, clean_params, raise_errors_in, validate_param, validate_timestamp
from .util.request import Request
from .util.signer import HMACSign


_DEPTH_RANGE = (20, 100)
_TRADES_LIMIT_RANGE = (20, 100)


class Client:
    """The main class interacting with FTX's REST API endpoints.

    Args:
        api_key (str): Your API Key.
        api_secret (str): The secret belonging to the API Key, used to sign \
            requests.
        subaccount (str): The sub-account every request is routed to, if any.
        endpoint (:class:`~ftx.util.enums.Endpoints`): The API endpoint \
            to interact with.
        timeout (float): The total timeout, in seconds, of a single request. \
            Defaults to `30`, `None` disables it.
        session (:class:`aiohttp.ClientSession`): An existing session to send \
            requests with.  The client won't close a session it didn't open.
        **config (dict): A dictionary-based version of the arguments above. \
            It may be preferred over keyword arguments when loading \
            credentials from elsewhere, e.g. ``Client(config=cfg)``.

    Examples:
        .. code-block:: python3

            async with Client(api_key="...", api_secret="...") as client:
                book = await client.get_orderbook(market_name="BTC/USD", depth=50)

    """

    def __init__(self,
            api_key: str=None,
            api_secret: str=None,
            *,
            endpoint: str=None,
            session: aiohttp.ClientSession=None,
            subaccount: str=None,
            timeout: float=ClientConfig._field_defaults["timeout"],
            **config
        ):
        cfg = config.get("config", {})

        if not isinstance(cfg, Mapping):
            raise InvalidArguments("`config` must be a mapping.")

        if not (cfg.get("api_key") or api_key):
            raise InvalidArguments("Missing API Key from config.")

        endpoint = cfg.get("endpoint", endpoint) or ClientConfig._field_defaults["endpoint"]

        self.__config = ClientConfig(
            api_key=cfg.get("api_key", api_key),
            api_secret=cfg.get("api_secret", api_secret),
            subaccount=cfg.get("subaccount", subaccount),
            endpoint=getattr(endpoint, "value", endpoint).rstrip("/"),
            timeout=cfg.get("timeout", timeout)
        )

        self.__signer = None

        if self.__config.api_secret:
            self.__signer = HMACSign(self.__config.api_secret)

        self._owns_session = session is None
        self._session = session

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"<endpoint='{self.endpoint}' subaccount={repr(self.subaccount)}>"

    @property
    def config(self) -> ClientConfig:
        """The immutable configuration this client was created with."""
        return self.__config

    @property
    def endpoint(self) -> str:
        return self.__config.endpoint

    @property
    def subaccount(self) -> str:
        return self.__config.subaccount

    async def close(self) -> None:
        """Close the client's active connection session."""

        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def get_coins(self) -> Dict[str, Any]:
        """Get all coins listed on the exchange."""

        return await self.make_request(METHOD.GET, PATH.COINS)

    async def get_funding_rates(self, params: Mapping=None, **kwargs) -> Dict[str, Any]:
        """Get the funding rates of perpetual futures.

        Args:
            params: A mapping with any of the keyword arguments below.
            start_time (Union[int, :class:`~datetime.datetime`]): The lower \
                bound of the funding time, in seconds.
            end_time (Union[int, :class:`~datetime.datetime`]): The upper \
                bound of the funding time, in seconds.

        Raises:
            InvalidArguments: A supplied argument was invalid.
            RateLimited: Too many requests were made.
            RequestFailed: The request couldn't be completed.

        """

        if params is None and not kwargs:
            params = {}

        params = assert_params(params, **kwargs)

        query = {
            "start_time": validate_timestamp(params.get("start_time")),
            "end_time": validate_timestamp(params.get("end_time"))
        }

        return await self.make_request(METHOD.GET, PATH.FUNDING_RATES, params=query)

    async def get_future(self, name: str) -> Dict[str, Any]:
        """Get a single future.

        Args:
            name: The future's name, e.g. `'BTC-PERP'`.

        """

        validate_param({"name": name}, "name", str, required=True)

        return await self.make_request(METHOD.GET, PATH.FUTURE.format(name=name))

    async def get_future_stats(self, name: str) -> Dict[str, Any]:
        """Get the stats (open interest, next funding rate, ...) of a future."""

        validate_param({"name": name}, "name", str, required=True)

        return await self.make_request(METHOD.GET, PATH.FUTURE_STATS.format(name=name))

    async def get_futures(self) -> Dict[str, Any]:
        """Get all futures listed on the exchange."""

        return await self.make_request(METHOD.GET, PATH.FUTURES)

    async def get_historical_prices(self, params: Mapping=None, **kwargs) -> Dict[str, Any]:
        """Get the historical mark price candles of a future.

        Args:
            params: A mapping with any of the keyword arguments below.
            future_name (str): The future's name, e.g. `'BTC-PERP'`. Required.
            resolution (int): The window length in seconds. Defaults to `300`.
            limit (int): The maximum number of candles. Defaults to `35`.
            start_time (Union[int, :class:`~datetime.datetime`]): The lower \
                bound, in seconds.
            end_time (Union[int, :class:`~datetime.datetime`]): The upper \
                bound, in seconds.

        Raises:
            InvalidArguments: A supplied argument was invalid.
            RateLimited: Too many requests were made.
            RequestFailed: The request couldn't be completed.

        """

        params = {
            "resolution": 300,
            "limit": 35,
            **clean_params(assert_params(params, **kwargs))
        }

        validate_param(params, "future_name", str, required=True)
        validate_param(params, "resolution", NUMBER)
        validate_param(params, "limit", NUMBER)

        query = {
            "resolution": params["resolution"],
            "limit": params["limit"],
            "start_time": validate_timestamp(params.get("start_time")),
            "end_time": validate_timestamp(params.get("end_time"))
        }
        path = PATH.MARK_CANDLES.format(name=params["future_name"])

        return await self.make_request(METHOD.GET, path, params=query)

    async def get_market(self, name: str) -> Dict[str, Any]:
        """Get a single market.

        Args:
            name: The market's name, e.g. `'BTC/USD'` or `'BTC-PERP'`.

        """

        validate_param({"name": name}, "name", str, required=True)

        return await self.make_request(METHOD.GET, PATH.MARKET.format(name=name))

    async def get_markets(self) -> Dict[str, Any]:
        """Get all spot and futures markets."""

        return await self.make_request(METHOD.GET, PATH.MARKETS)

    async def get_orderbook(self, params: Mapping=None, **kwargs) -> Dict[str, Any]:
        """Get the orderbook for a specific market.

        Args:
            params: A mapping with any of the keyword arguments below.
            market_name (str): The market's name, e.g. `'BTC/USD'`. Required.
            depth (int): The number of price levels per side, between `20` \
                and `100`. Defaults to `20`.

        Returns:
            The decoded response, with the bids and asks under `'result'`.

        Raises:
            InvalidArguments: A supplied argument was invalid.
            RateLimited: Too many requests were made.
            RequestFailed: The request couldn't be completed.

        """

        params = {
            "depth": 20,
            **clean_params(assert_params(params, **kwargs))
        }

        validate_param(params, "market_name", str, required=True)
        validate_param(params, "depth", NUMBER, bounds=_DEPTH_RANGE)

        query = {
            "depth": params["depth"]
        }
        path = PATH.ORDERBOOK.format(name=params["market_name"])

        return await self.make_request(METHOD.GET, path, params=query)

    async def get_trades(self, params: Mapping=None, **kwargs) -> Dict[str, Any]:
        """Get the most recent trades of a market.

        Args:
            params: A mapping with any of the keyword arguments below.
            market_name (str): The market's name, e.g. `'BTC/USD'`. Required.
            limit (int): The number of trades, between `20` and `100`. \
                Defaults to `20`.
            start_time (Union[int, :class:`~datetime.datetime`]): The lower \
                bound, in seconds.
            end_time (Union[int, :class:`~datetime.datetime`]): The upper \
                bound, in seconds.

        Raises:
            InvalidArguments: A supplied argument was invalid.
            RateLimited: Too many requests were made.
            RequestFailed: The request couldn't be completed.

        """

        params = {
            "limit": 20,
            **clean_params(assert_params(params, **kwargs))
        }

        validate_param(params, "market_name", str, required=True)
        validate_param(params, "limit", NUMBER, bounds=_TRADES_LIMIT_RANGE)

        query = {
            "limit": params["limit"],
            "start_time": validate_timestamp(params.get("start_time")),
            "end_time": validate_timestamp(params.get("end_time"))
        }
        path = PATH.TRADES.format(name=params["market_name"])

        return await self.make_request(METHOD.GET, path, params=query)

    async def make_request(self,
            method: Union[str, METHOD],
            path: str,
            body: Union[dict, List[Any]]=None,
            *,
            params: dict=None
        ) -> Any:
        """Make a request to the API and return the decoded JSON response.

        Args:
            method: One of `'GET'`, `'POST'` or `'DELETE'`.
            path: The path relative to the client's endpoint, e.g. `'/coins'`.
            body: A JSON-serialisable payload, only sent with a POST.
            params: Query parameters.  Those whose value is `None` are left out.

        Raises:
            InvalidArguments: An unsupported method was given.
            RateLimited: The API responded with a 429.
            RequestFailed: Any other network or HTTP failure.

        """

        try:
            method = METHOD(str(getattr(method, "value", method)).upper())
        except ValueError:
            raise InvalidArguments(f"Unsupported request method: {repr(method)}")

        request = Request(method.value, self.endpoint, path, params=params, payload=body)
        url = request.url
        headers = self.sign_request(request)

        if request.body is not None:
            headers["Content-Type"] = "application/json"

        logging.debug(f"{request.method} {url}")

        try:
            async with self._get_session().request(
                request.method,
                url,
                headers=headers,
                data=request.body
            ) as r:
                logging.debug(f"{request.method} {url} -> {r.status}")

                if r.status == 429:
                    raise RateLimited()

                raw_content = await r.read()

                if r.status >= 400:
                    raise_errors_in(raw_content, r.status, r.reason)

                return json.loads(raw_content.decode())

        except aiohttp.ClientResponseError as e:
            if e.status == 429:
                raise RateLimited() from e
            raise RequestFailed(e.message or str(e), status=e.status) from e

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise RequestFailed(str(e) or type(e).__name__) from e

    def sign_request(self, request: Request, timestamp: int=None) -> Dict[str, str]:
        """Build the authentication headers for a request.

        Without an API secret only the key (and sub-account) headers are
        returned, which is enough for the public endpoints.

        """

        if self.__signer:
            headers = self.__signer.headers(request, self.__config.api_key, timestamp)
        else:
            headers = {
                Headers.KEY.value: self.__config.api_key
            }

        if self.subaccount:
            headers[Headers.SUBACCOUNT.value] = urllib.parse.quote(self.subaccount)

        return headers

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            if not self._owns_session:
                raise RequestFailed("The supplied session has been closed.")

            timeout = aiohttp.ClientTimeout(total=self.__config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)

        return self._session
