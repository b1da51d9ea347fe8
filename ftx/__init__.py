from .client import Client
from .config import ClientConfig
from .errors import *
from .util.enums import Endpoints
