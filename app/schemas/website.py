from pydantic import BaseModel, ConfigDict, Field


class SocialLinks(BaseModel):
    linkedin: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    instagram: str | None = None
    youtube: str | None = None


class PageMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    text: str = ""  # script/style-free excerpt, max 5000 chars
    social_links: SocialLinks = Field(default_factory=SocialLinks, alias="socialLinks")
    email: str | None = None
    phone: str | None = None  # +1-NNN-NNN-NNNN
