"""
Location models for IBGE data.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LocationDTO(BaseModel):
    """
    External shape of an IBGE location.

    Fields are optional at parse time; required/format rules are applied by
    ``ibge_api.services.validation`` so every violation is reported per field.
    """

    id: Optional[str] = Field(None, description="IBGE municipality code (7 digits)")
    state: Optional[str] = Field(None, description="State abbreviation (e.g., SP)")
    city: Optional[str] = Field(None, description="Municipality name")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {"id": "3550308", "state": "SP", "city": "São Paulo"}
        },
    }
