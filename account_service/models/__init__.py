"""SQLAlchemy models exposed for metadata creation and imports."""
from .user import Role, User

__all__ = ["Role", "User"]
