"""
AuthService
===========

Transactional facade over the login, register and logout use cases, plus the
administrative account-state transitions used by the CLI.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from authapi.domain.entities import AuthUser
from authapi.domain.value_objects import JwtPayload, looks_like_email
from authapi.services._shared.base import BaseService, ServiceContext
from authapi.services._shared.errors import AuthenticationError, NotFoundError
from authapi.services._shared.ports import (
    IdGenerator,
    PasswordHasher,
    TokenBlacklist,
    TokenService,
    uuid_id_generator,
)
from authapi.services.auth.dto import (
    LoginIn,
    LoginOut,
    LogoutIn,
    LogoutOut,
    RegisteredUserOut,
    RegisterIn,
)
from authapi.services.auth.login import LoginUseCase
from authapi.services.auth.logout import LogoutUseCase
from authapi.services.auth.register import RegisterUseCase

logger = logging.getLogger(__name__)

#: Account-state transitions exposed to administrators.
ACCOUNT_TRANSITIONS: dict[str, Callable[[AuthUser], None]] = {
    "confirm": AuthUser.confirm_account,
    "block": AuthUser.block_account,
    "unblock": AuthUser.unblock_account,
}


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / logout / verify).

    Parameters
    ----------
    passwords: PasswordHasher
        Hashing adapter (argon2id in production).
    tokens: TokenService
        Signing/verification adapter; its repository must read the same
        session the units of work use.
    blacklist: TokenBlacklist
        Revocation store fed by logout.
    new_id: IdGenerator, optional
        Identifier factory for new accounts (UUID4 by default).
    password_min_length: int, optional
        Minimum accepted plaintext length at registration.
    ctx: ServiceContext, optional
        Request-scoped context used to enrich log records.
    """

    def __init__(
        self,
        *,
        passwords: PasswordHasher,
        tokens: TokenService,
        blacklist: TokenBlacklist,
        new_id: IdGenerator = uuid_id_generator,
        password_min_length: int = 8,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.passwords = passwords
        self.tokens = tokens
        self.blacklist = blacklist
        self.new_id = new_id
        self.password_min_length = password_min_length

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> RegisteredUserOut:
        """
        Create an account and store the optional profile names on its row.

        :raises EmailAlreadyExistsError: Email taken (checked first).
        :raises UsernameAlreadyExistsError: Username taken.
        :raises DomainValidationError: Malformed email or too-short password.
        """
        logger.info(
            "Registration attempt",
            extra={"event": "auth.register.attempt", "context": self.log_context(username=dto.username)},
        )
        with self.rw_uow() as uow:
            use_case = RegisterUseCase(
                uow.auth_users,
                self.passwords,
                self.new_id,
                password_min_length=self.password_min_length,
            )
            created = use_case.execute(dto)

            if dto.first_name or dto.last_name:
                row = uow.users.get(created.id)
                if row is None:
                    raise NotFoundError("User", created.id)
                uow.users.assign_updates(
                    row, {"first_name": dto.first_name or None, "last_name": dto.last_name or None}
                )

        logger.info(
            "User registered",
            extra={"event": "auth.register.succeeded", "context": self.log_context(user_id=created.id)},
        )
        return created

    # ------------------------------------------------------------------ #
    # Login / logout
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and issue a session token.

        :raises InvalidCredentialsError: Unknown identifier or wrong password.
        :raises AccountNotActiveError: Account unconfirmed or blocked.
        """
        logger.info("Login attempt", extra={"event": "auth.login.attempt", "context": self.log_context()})
        try:
            with self.ro_uow() as uow:
                result = LoginUseCase(uow.auth_users, self.passwords, self.tokens).execute(dto)
        except AuthenticationError as exc:
            logger.warning(
                "Login failed",
                extra={
                    "event": "auth.login.failed",
                    "context": self.log_context(reason=type(exc).__name__),
                },
            )
            raise

        logger.info(
            "Login succeeded",
            extra={"event": "auth.login.succeeded", "context": self.log_context(user_id=result.user.id)},
        )
        return result

    def logout(self, dto: LogoutIn) -> LogoutOut:
        """Revoke the presented token; never fails."""
        result = LogoutUseCase(self.blacklist, self.tokens).execute(dto)
        logger.info(
            "Logout",
            extra={"event": "auth.logout", "context": self.log_context(had_token=bool(dto.token))},
        )
        return result

    def verify(self, token: str) -> JwtPayload:
        """
        Verify ``token`` and re-resolve its subject.

        :raises InvalidTokenError: On any verification failure.
        """
        with self.ro_uow():
            return self.tokens.verify_token(token)

    # ------------------------------------------------------------------ #
    # Administration
    # ------------------------------------------------------------------ #

    def change_account_state(self, identifier: str, transition: str) -> AuthUser:
        """
        Apply ``confirm``, ``block`` or ``unblock`` to the account ``identifier``.

        :param identifier: Email or username.
        :param transition: Key of :data:`ACCOUNT_TRANSITIONS`.
        :raises NotFoundError: If no account matches.
        :raises ValueError: If the transition is unknown.
        """
        apply = ACCOUNT_TRANSITIONS.get(transition)
        if apply is None:
            raise ValueError(f"Unknown account transition: {transition!r}")

        with self.rw_uow() as uow:
            repo = uow.auth_users
            user = (
                repo.find_by_email(identifier)
                if looks_like_email(identifier)
                else repo.find_by_username(identifier)
            )
            if user is None:
                raise NotFoundError("User", identifier)
            apply(user)
            return repo.update(user)
