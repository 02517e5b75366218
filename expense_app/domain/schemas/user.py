"""Pydantic request schemas for the user API."""

from typing import Optional

from expense_app.domain.models.base import CamelModel


class RoleChangeRequest(CamelModel):
    """Role is validated by the service so an unknown value yields a 400, not a schema error."""

    role: Optional[str] = None
    admin_id: Optional[str] = None
