from authapi.services.auth.dto import (
    LoginIn,
    LoginOut,
    LoginUserOut,
    LogoutIn,
    LogoutOut,
    RegisteredUserOut,
    RegisterIn,
)
from authapi.services.auth.login import LoginUseCase
from authapi.services.auth.logout import LogoutUseCase
from authapi.services.auth.register import RegisterUseCase
from authapi.services.auth.service import ACCOUNT_TRANSITIONS, AuthService

__all__ = [
    "ACCOUNT_TRANSITIONS",
    "AuthService",
    "LoginIn",
    "LoginOut",
    "LoginUseCase",
    "LoginUserOut",
    "LogoutIn",
    "LogoutOut",
    "LogoutUseCase",
    "RegisterIn",
    "RegisterUseCase",
    "RegisteredUserOut",
]
