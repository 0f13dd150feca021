"""
IMDS Token Response
Typed schema for the metadata endpoint's token payload and the tagged
outcome of a token fetch.
"""

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class TokenResponse(BaseModel):
    """
    OAuth2 token payload returned by the instance metadata endpoint.

    Only ``access_token`` decides the probe outcome. The remaining fields
    are kept for logging.
    """

    model_config = ConfigDict(extra="ignore")

    access_token: Optional[str] = None
    client_id: Optional[str] = None
    expires_on: Optional[str] = None
    resource: Optional[str] = None
    token_type: Optional[str] = None


@dataclass(frozen=True)
class TokenAcquired:
    """A non-empty access token was returned."""

    token: str
    client_id: Optional[str] = None

    def __repr__(self) -> str:
        # never expose the token itself
        return f"TokenAcquired(client_id={self.client_id!r})"


@dataclass(frozen=True)
class TokenFailure:
    """The token could not be obtained."""

    reason: str


TokenOutcome = Union[TokenAcquired, TokenFailure]
