"""Service layer.

- :mod:`authapi.services._shared`: :class:`BaseService`, ports and service errors.
- :mod:`authapi.services.auth`: :class:`AuthService` with the login, register
  and logout use cases.
- :mod:`authapi.services.users`: :class:`UsersService` for profiles.

Nothing is re-exported here: repositories import the shared errors and ports,
so eager imports of the services would be circular.
"""
