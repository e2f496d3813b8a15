"""
Account schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional


class DeleteAccountRequest(BaseModel):
    """Account deletion must be confirmed by typing DELETE."""
    confirm_text: Optional[str] = Field(None, alias="confirmText", description='Must be exactly "DELETE"')

    class Config:
        populate_by_name = True


class AuthenticatedUser(BaseModel):
    """Identity resolved from a bearer token by the auth provider."""
    id: str
    email: Optional[str] = None
