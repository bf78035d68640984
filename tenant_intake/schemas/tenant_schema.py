"""Tenant and landlord records as stored in the document store."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Tenant(BaseModel):
    """Tenant record, managed by an external system and read-only here."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    phone: str
    landlord_id: Optional[str] = Field(default=None, alias="landlordId")
    unit_id: Optional[str] = Field(default=None, alias="unitId")
    name: Optional[str] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")
    first_name: Optional[str] = Field(default=None, alias="firstName")
    display_name_field: Optional[str] = Field(default=None, alias="displayName")

    @property
    def display_name(self) -> str:
        """First non-empty of name, fullName, firstName, displayName."""
        for candidate in (self.name, self.full_name, self.first_name, self.display_name_field):
            if candidate and candidate.strip():
                return candidate.strip()
        return ""


class Landlord(BaseModel):
    """Landlord record. Only the phone number matters to the intake flow."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    phone: Optional[str] = None
    name: Optional[str] = None
