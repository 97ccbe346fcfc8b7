"""Session termination."""

from __future__ import annotations

import logging

from authapi.services._shared.ports import TokenBlacklist, TokenService
from authapi.services.auth.dto import LogoutIn, LogoutOut

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Revoke the presented token until it would have expired.

    Logout never fails for the caller: without a token the blacklist is not
    touched, and a blacklist failure is logged and swallowed.
    """

    def __init__(self, blacklist: TokenBlacklist, tokens: TokenService) -> None:
        self.blacklist = blacklist
        self.tokens = tokens

    def execute(self, dto: LogoutIn) -> LogoutOut:
        if not dto.token:
            return LogoutOut(success=True)
        try:
            self.blacklist.add(dto.token, self.tokens.read_expiry(dto.token))
        except Exception:
            logger.warning(
                "Token blacklist unavailable; token not revoked",
                extra={"event": "auth.blacklist.failed"},
                exc_info=True,
            )
        return LogoutOut(success=True)
