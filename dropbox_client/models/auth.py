"""
Authentication-related domain models.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class OAuthToken:
    """
    Token issued by the OAuth 2 token endpoint.

    Attributes:
        access_token: Bearer token for API requests.
        expires_in: Lifetime of the access token in seconds (e.g., 14400 for 4 hours).
        token_type: Always "bearer".
        scope: Permission set applied to the token.
        refresh_token: Long-lived token, present when offline access was requested.
        account_id: Account the token belongs to.
    """

    access_token: str
    expires_in: int
    token_type: str = "bearer"
    scope: str | None = None
    refresh_token: str | None = None
    account_id: str | None = None
