"""User profile returned by the get-profile endpoint."""

from __future__ import annotations

from typing import Optional

from linehook.schemas.base import LineModel


class Profile(LineModel):
    display_name: str
    user_id: str
    picture_url: Optional[str] = None
    status_message: Optional[str] = None
