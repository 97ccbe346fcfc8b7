"""Credential verification and session-token issuance."""

from __future__ import annotations

from authapi.domain.entities import AuthUser
from authapi.domain.value_objects import JwtPayload, looks_like_email
from authapi.services._shared.errors import AccountNotActiveError, InvalidCredentialsError
from authapi.services._shared.ports import AuthUserRepository, PasswordHasher, TokenService
from authapi.services.auth.dto import LoginIn, LoginOut, LoginUserOut


class LoginUseCase:
    """
    Authenticate an identifier/password pair and sign a session token.

    The identifier is looked up by email when it is email-shaped, otherwise
    by username. Account activity is checked *before* the password, so a
    blocked or unconfirmed account yields :class:`AccountNotActiveError` even
    with the right password. The user record is never modified.
    """

    def __init__(
        self,
        users: AuthUserRepository,
        passwords: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.users = users
        self.passwords = passwords
        self.tokens = tokens

    def execute(self, dto: LoginIn) -> LoginOut:
        user = self._find(dto.identifier)
        if user is None:
            raise InvalidCredentialsError()
        if not user.is_active():
            raise AccountNotActiveError()
        if not self.passwords.compare(dto.password, user.password):
            raise InvalidCredentialsError()

        token = self.tokens.generate_token(JwtPayload(sub=user.id, identifier=user.email.value))
        return LoginOut(
            token=token,
            user=LoginUserOut(id=user.id, email=user.email.value, username=user.username),
        )

    def _find(self, identifier: str) -> AuthUser | None:
        if not isinstance(identifier, str) or not identifier:
            return None
        if looks_like_email(identifier):
            return self.users.find_by_email(identifier)
        return self.users.find_by_username(identifier)
