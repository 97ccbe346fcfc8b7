from authapi.models.user import User

__all__ = ["User"]
