"""Route modules for the account API."""
from . import auth, users

__all__ = ["auth", "users"]
