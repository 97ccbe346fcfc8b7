from __future__ import annotations

from dataclasses import dataclass

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param identifier: Email-shaped string or username.
    :type identifier: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    identifier: str
    password: str

    def __repr__(self) -> str:
        return f"LoginIn(identifier={self.identifier!r}, password='********')"


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    ``first_name``/``last_name`` are not part of the credential aggregate;
    only the profile row stores them.
    """

    email: str
    username: str
    password: str
    first_name: str | None = None
    last_name: str | None = None

    def __repr__(self) -> str:
        return f"RegisterIn(email={self.email!r}, username={self.username!r}, password='********')"


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param token: Session token being retired, if the request carried one.
    :type token: str | None
    """

    token: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginUserOut:
    id: str
    email: str
    username: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for a successful login.

    :param token: Signed session token (set as a cookie by the API layer).
    :param user: Public projection of the authenticated account.
    """

    token: str
    user: LoginUserOut


@dataclass(frozen=True, slots=True)
class RegisteredUserOut:
    """Public projection returned by registration; never carries the hash."""

    id: str
    email: str
    username: str
    confirmed: bool


@dataclass(frozen=True, slots=True)
class LogoutOut:
    success: bool = True
