import json
import urllib.parse
from collections.abc import Mapping
from datetime import datetime
from typing import Tuple, Union

from ..errors import InvalidArguments, RequestFailed


NUMBER = "number"


def assert_params(params: Mapping=None, **kwargs) -> dict:
    """Merge a parameter mapping with any keyword arguments.

    Endpoint methods accept their parameters either as a single mapping or as
    keyword arguments (or both, in which case the keywords take precedence).

    Returns:
        dict: A new dictionary containing every supplied parameter.

    Raises:
        InvalidArguments: Nothing was supplied, or `params` isn't a mapping.

    """

    if params is None and not kwargs:
        raise InvalidArguments("No parameters supplied.")

    if params is not None and not isinstance(params, Mapping):
        raise InvalidArguments(
            f"Parameters must be a mapping, got '{type(params).__name__}'."
        )

    return {**(params or {}), **kwargs}


def clean_params(params: dict) -> dict:
    """Clean all NoneType parameters from a given dict.

    The API doesn't require every optional parameter to be passed to it, so
    this removes any that the caller didn't supply rather than letting them
    be serialised as empty strings.

    Note:
        Only `None` values are removed. Other falsy values, such as `0`,
        remain.

    Returns:
        dict: A clean parameter dictionary, removing all pairs with `None` values.

    """

    return {k: v for k, v in params.items() if v is not None}


def is_number(value) -> bool:
    # `bool` is a subclass of `int`, but `True` is hardly a depth level
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def raise_errors_in(content: bytes, status: int, reason: str=None) -> None:
    """Raise the appropriate error from a failed API response.

    Failed responses look like ``{"success": false, "error": "Not logged in"}``,
    in which case the exchange's own message is used.  If the body can't be
    decoded, the HTTP reason phrase is used instead.

    Raises:
        RequestFailed: Always.

    """

    message = None

    try:
        body = json.loads(content.decode())
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("error")

    raise RequestFailed(
        message or reason or f"Request failed with status {status}.",
        status=status
    )


def to_query_string(params: dict) -> str:
    """Build a `key=value&key2=value2` query string from the non-null params."""

    return urllib.parse.urlencode(clean_params(params))


def validate_param(
        params: dict,
        name: str,
        kind: Union[type, str],
        *,
        required: bool=False,
        bounds: Tuple[int, int]=None
    ) -> None:
    """Validate a single entry of a parameter dictionary.

    Optional parameters are only checked when they're present.

    Args:
        params (dict): The parameters to look in.
        name (str): The key being validated.
        kind (Union[type, str]): Either `str`, or `"number"` for any int or
            float.
        required (bool): Whether the key has to be present.  An empty string
            counts as missing.
        bounds (Tuple[int, int]): An inclusive `(lower, upper)` range for
            numeric parameters.

    Raises:
        InvalidArguments: The parameter is missing, of the wrong type or out
            of bounds.

    """

    value = params.get(name)

    # An empty name would turn e.g. `/markets/{name}` into `/markets/`
    if value is None or (required and value == ""):
        if required:
            raise InvalidArguments(f"Missing required parameter '{name}'.")
        return

    if kind == NUMBER:
        if not is_number(value):
            raise InvalidArguments(
                f"'{name}' must be a number, got '{type(value).__name__}'."
            )
    elif not isinstance(value, kind):
        raise InvalidArguments(
            f"'{name}' must be of type '{kind.__name__}', " + \
            f"got '{type(value).__name__}'."
        )

    if bounds:
        lower, upper = bounds

        if not lower <= value <= upper:
            raise InvalidArguments(
                f"'{name}' must be between {lower} and {upper}, got {value}."
            )


def validate_timestamp(timestamp: Union[int, float, datetime]) -> Union[int, float]:
    """Validate whether the given time will be suitable for the API.

    The API takes `start_time` and `end_time` in seconds since the epoch.  A
    :obj:`~datetime.datetime` is converted to that, and numbers are passed
    through as they are.

    Args:
        timestamp (Union[int, float, :obj:`~datetime.datetime`]): The time to
            be validated.

    Returns:
        Union[int, float]: A UNIX timestamp in seconds, or `None` if no
            timestamp was given.

    Raises:
        InvalidArguments: The `timestamp` wasn't of an expected type.

    """

    if timestamp is None:
        return

    if isinstance(timestamp, datetime):
        return int(timestamp.timestamp())

    if is_number(timestamp):
        return timestamp

    raise InvalidArguments(
        "Invalid type. Expected a number or 'datetime.datetime', " + \
        f"got '{type(timestamp).__name__}'."
    )
