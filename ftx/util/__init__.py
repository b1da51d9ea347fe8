from .enums import Endpoints, Headers, Methods, Paths
from .helpers import assert_params, clean_params, raise_errors_in, to_query_string, validate_param, validate_timestamp
from .request import Request
from .signer import HMACSign
