"""
Account-related domain models.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Name:
    """
    Details of a user's name.

    Attributes:
        given_name: Also known as a first name.
        surname: Also known as a last name or family name.
        familiar_name: Locale-dependent name.
        display_name: Name used to represent the account.
        abbreviated_name: Usually the initials.
    """

    given_name: str
    surname: str
    familiar_name: str
    display_name: str
    abbreviated_name: str


@dataclass(frozen=True, kw_only=True)
class Account:
    """
    The current user's account.

    Attributes:
        account_id: Unique Dropbox account ID.
        name: Name details.
        email: Email address. Check ``email_verified`` before relying on it.
        email_verified: Whether the address was verified.
        disabled: Whether the account has been disabled.
        locale: IETF language tag chosen by the user.
    """

    account_id: str
    name: Name
    email: str
    email_verified: bool
    disabled: bool
    locale: str
