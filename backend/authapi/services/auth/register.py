"""Account creation."""

from __future__ import annotations

from authapi.domain.entities import AuthUser
from authapi.domain.value_objects import Email, PlaintextPassword
from authapi.services._shared.errors import EmailAlreadyExistsError, UsernameAlreadyExistsError
from authapi.services._shared.ports import AuthUserRepository, IdGenerator, PasswordHasher
from authapi.services.auth.dto import RegisterIn, RegisteredUserOut


class RegisterUseCase:
    """
    Create a credential holder.

    Email uniqueness is checked before username uniqueness, so a request with
    both taken always reports the email. These checks are an early, friendly
    answer only: two concurrent registrations can both pass them, and the
    repository's ``save`` raises the same errors from the storage constraint.

    New accounts start confirmed and unblocked; there is no confirmation flow.
    """

    def __init__(
        self,
        users: AuthUserRepository,
        passwords: PasswordHasher,
        new_id: IdGenerator,
        *,
        password_min_length: int = 8,
    ) -> None:
        self.users = users
        self.passwords = passwords
        self.new_id = new_id
        self.password_min_length = password_min_length

    def execute(self, dto: RegisterIn) -> RegisteredUserOut:
        email = Email(dto.email)
        password = PlaintextPassword(dto.password, self.password_min_length)

        if self.users.find_by_email(email.value) is not None:
            raise EmailAlreadyExistsError(email.value)
        if self.users.find_by_username(dto.username) is not None:
            raise UsernameAlreadyExistsError(dto.username)

        user = AuthUser(
            id=self.new_id(),
            email=email,
            username=dto.username,
            password=self.passwords.hash(password),
            confirmed=True,
            blocked=False,
        )
        saved = self.users.save(user)
        return RegisteredUserOut(
            id=saved.id,
            email=saved.email.value,
            username=saved.username,
            confirmed=saved.confirmed,
        )
