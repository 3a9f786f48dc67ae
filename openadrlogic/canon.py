from __future__ import annotations
from typing import Final

# Header keys shared by every top-level object
ID_KEY: Final[str] = "id"
CREATED_KEY: Final[str] = "createdDateTime"
MODIFIED_KEY: Final[str] = "modificationDateTime"
OBJECT_TYPE_KEY: Final[str] = "objectType"

# Report descriptor wire defaults; -1 means unspecified/all/indefinite
DEFAULT_AGGREGATE: Final[bool] = False
DEFAULT_START_INTERVAL: Final[int] = -1
DEFAULT_NUM_INTERVALS: Final[int] = -1
DEFAULT_HISTORICAL: Final[bool] = True
DEFAULT_FREQUENCY: Final[int] = -1
DEFAULT_REPEAT: Final[int] = 1

INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1
UINT32_MAX: Final[int] = 2**32 - 1
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

PERCENTAGE_MAX: Final[int] = 100

PROBLEM_DEFAULT_TYPE: Final[str] = "about:blank"
GRANT_TYPE_CLIENT_CREDENTIALS: Final[str] = "client_credentials"
TOKEN_TYPE_BEARER: Final[str] = "Bearer"
