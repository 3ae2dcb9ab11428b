"""Authentication-related schemas."""
from __future__ import annotations

from pydantic import BaseModel


class CSRFTokenResponse(BaseModel):
    csrf_token: str
