from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def optional_str(value: Any) -> str | None:
    """Non-string or blank values collapse to None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


class ContactInfo(BaseModel):
    email: str | None = None
    phone: str | None = None

    @field_validator("email", "phone", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> str | None:
        return optional_str(value)


class SocialMedia(BaseModel):
    linkedin: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    instagram: str | None = None
    youtube: str | None = None

    @field_validator("linkedin", "twitter", "facebook", "instagram", "youtube", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> str | None:
        return optional_str(value)


class BusinessProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str | None = None
    description: str | None = None
    website: str = ""
    contact: ContactInfo = Field(default_factory=ContactInfo)
    social_media: SocialMedia = Field(default_factory=SocialMedia, alias="socialMedia")
    registration_number: str | None = Field(default=None, alias="registrationNumber")
    extracted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="extractedAt"
    )

    @field_validator("name", "description", "registration_number", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> str | None:
        return optional_str(value)

    @field_validator("website", mode="before")
    @classmethod
    def _coerce_website(cls, value: Any) -> str:
        return optional_str(value) or ""

    @field_validator("contact", "social_media", mode="before")
    @classmethod
    def _coerce_nested(cls, value: Any) -> Any:
        # A missing or malformed nested object means "all sub-fields absent".
        if isinstance(value, (dict, BaseModel)):
            return value
        return {}

    @classmethod
    def from_payload(cls, payload: dict) -> BusinessProfile:
        """Build a profile from loosely-shaped service output.

        Only the known keys are read; ``extractedAt`` is always stamped now,
        whatever the payload carried.
        """
        return cls.model_validate({
            "name": payload.get("name"),
            "description": payload.get("description"),
            "website": payload.get("website"),
            "contact": payload.get("contact"),
            "socialMedia": payload.get("socialMedia"),
            "registrationNumber": payload.get("registrationNumber"),
            "extractedAt": datetime.now(timezone.utc),
        })
