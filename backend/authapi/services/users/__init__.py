from authapi.services.users.dto import UNSET, CreateUserIn, ProfileOut, ProfileUpdateIn
from authapi.services.users.service import UsersService, to_profile

__all__ = [
    "UNSET",
    "CreateUserIn",
    "ProfileOut",
    "ProfileUpdateIn",
    "UsersService",
    "to_profile",
]
