"""Account-related API endpoints."""

from typing import Any

from dropbox_client.api.http_client import AsyncHttpClient
from dropbox_client.models.account import Account, Name


async def get_current_account(http: AsyncHttpClient) -> Account:
    """Get information about the current user's account."""
    data = await http.request_json("/2/users/get_current_account")
    return parse_account(data)


def parse_account(data: dict[str, Any]) -> Account:
    name = data["name"]
    return Account(
        account_id=data["account_id"],
        name=Name(
            given_name=name["given_name"],
            surname=name["surname"],
            familiar_name=name["familiar_name"],
            display_name=name["display_name"],
            abbreviated_name=name["abbreviated_name"],
        ),
        email=data["email"],
        email_verified=data["email_verified"],
        disabled=data["disabled"],
        locale=data["locale"],
    )
