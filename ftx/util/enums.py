from enum import Enum


class Endpoints(str, Enum):
    MAINNET = "https://ftx.com/api"
    US = "https://ftx.us/api"


class Headers(str, Enum):
    """Authentication headers attached to every request."""

    KEY = "FTX-KEY"
    SIGN = "FTX-SIGN"
    SUBACCOUNT = "FTX-SUBACCOUNT"
    TIMESTAMP = "FTX-TS"


class Methods(str, Enum):
    DELETE = "DELETE"
    GET = "GET"
    POST = "POST"


class Paths(str, Enum):
    """All paths available on the API.

    Paths containing a `{placeholder}` need formatting before use, e.g.

        >>> Paths.FUTURE.format(name="BTC-PERP")
        '/futures/BTC-PERP'

    """

    COINS = "/coins"
    FUNDING_RATES = "/funding_rates"
    FUTURE = "/futures/{name}"
    FUTURE_STATS = "/futures/{name}/stats"
    FUTURES = "/futures"
    MARK_CANDLES = "/futures/{name}/mark_candles"
    MARKET = "/markets/{name}"
    MARKETS = "/markets"
    ORDERBOOK = "/markets/{name}/orderbook"
    TRADES = "/markets/{name}/trades"
