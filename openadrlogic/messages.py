"""
Auxiliary wire messages exchanged next to the OpenADR objects.

Problem is the RFC 7807 error body returned by a VTN; the OAuth messages
cover the client-credentials token exchange. They carry no objectType and
are never dispatched: decode them by naming the class.
"""

from datetime import timedelta
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, StrictInt, StrictStr

from . import canon, codecs, validate
from .enums import AuthErrorType
from .fields import wire
from .types import Name, Url, WireModel

Seconds = Annotated[timedelta, AfterValidator(validate.check_whole_seconds)]


class Problem(WireModel):
    type: Annotated[StrictStr, wire("type", codecs.TEXT)] = canon.PROBLEM_DEFAULT_TYPE
    title: Annotated[Optional[StrictStr], wire("title", codecs.TEXT)] = None
    status: Annotated[Optional[StrictInt], wire("status", codecs.INT32)] = None
    detail: Annotated[Optional[StrictStr], wire("detail", codecs.TEXT)] = None
    instance: Annotated[Optional[StrictStr], wire("instance", codecs.TEXT)] = None

    def __str__(self) -> str:
        head = f"{self.status} {self.title}" if self.status is not None else str(self.title)
        return f"{head}: {self.detail}" if self.detail else head


class AuthError(WireModel):
    error: Annotated[AuthErrorType, wire("error", codecs.open_enum(AuthErrorType))]
    error_description: Annotated[
        Optional[StrictStr], wire("error_description", codecs.TEXT)
    ] = None
    error_uri: Annotated[Optional[Url], wire("error_uri", codecs.URL)] = None


class ClientCredentialRequest(WireModel):
    """Token request body; grant_type is always sent."""

    grant_type: Annotated[
        Literal["client_credentials"],
        wire("grant_type", codecs.NAME, required=True),
    ] = canon.GRANT_TYPE_CLIENT_CREDENTIALS
    client_id: Annotated[Name, wire("client_id", codecs.NAME)]
    client_secret: Annotated[Name, wire("client_secret", codecs.NAME)]
    scope: Annotated[Optional[StrictStr], wire("scope", codecs.TEXT)] = None


class ClientCredentialResponse(WireModel):
    access_token: Annotated[Name, wire("access_token", codecs.NAME)]
    token_type: Annotated[
        Name, wire("token_type", codecs.NAME, required=True)
    ] = canon.TOKEN_TYPE_BEARER
    expires_in: Annotated[Optional[Seconds], wire("expires_in", codecs.SECONDS)] = None
    refresh_token: Annotated[Optional[StrictStr], wire("refresh_token", codecs.TEXT)] = None
    scope: Annotated[Optional[StrictStr], wire("scope", codecs.TEXT)] = None
