"""
Profile document schemas.

A profile is one `about` singleton plus ordered item lists. Every item
carries an integer `id` that is unique inside its own list only.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional, Type

from personalbook.core.config import settings

DEFAULT_ABOUT_NAME = "New User"
DEFAULT_ABOUT_BIO = "Bio goes here..."


class _CamelModel(BaseModel):
    # Unknown keys are dropped, which also discards userId/publicLinkKey on replace
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class AboutSection(_CamelModel):
    name: str = DEFAULT_ABOUT_NAME
    bio: str = DEFAULT_ABOUT_BIO
    image: str = Field(default_factory=lambda: settings.get_default_avatar("New"))


class SectionItem(_CamelModel):
    id: int


class EducationItem(SectionItem):
    level: Optional[str] = None
    name: Optional[str] = None
    year: Optional[str] = None
    grade: Optional[str] = None


class ProjectItem(SectionItem):
    name: Optional[str] = None
    stack: Optional[str] = None
    desc: Optional[str] = None
    image: Optional[str] = None


class LearningItem(SectionItem):
    title: Optional[str] = None
    issuer: Optional[str] = None
    date: Optional[str] = None


class InterestItem(SectionItem):
    text: Optional[str] = None


class WishlistItem(SectionItem):
    text: Optional[str] = None
    image: Optional[str] = None


class TourItem(SectionItem):
    place: Optional[str] = None
    date: Optional[str] = None
    desc: Optional[str] = None
    image: Optional[str] = None


class BestPicItem(SectionItem):
    image: Optional[str] = None
    caption: Optional[str] = None


# Storage column name -> item model
SECTION_ITEM_MODELS: Dict[str, Type[SectionItem]] = {
    "education": EducationItem,
    "projects": ProjectItem,
    "learnings": LearningItem,
    "interests": InterestItem,
    "wishlist": WishlistItem,
    "tours": TourItem,
    "best_pics": BestPicItem,
}


class ProfileDocument(_CamelModel):
    """
    Full replace body for a profile.

    Omitted lists become empty and an omitted `about` resets to defaults;
    the whole stored document is overwritten, never merged.
    """
    about: AboutSection = Field(default_factory=AboutSection)
    education: List[EducationItem] = Field(default_factory=list)
    projects: List[ProjectItem] = Field(default_factory=list)
    learnings: List[LearningItem] = Field(default_factory=list)
    interests: List[InterestItem] = Field(default_factory=list)
    wishlist: List[WishlistItem] = Field(default_factory=list)
    tours: List[TourItem] = Field(default_factory=list)
    best_pics: List[BestPicItem] = Field(default_factory=list)

    @field_validator(*SECTION_ITEM_MODELS.keys())
    @classmethod
    def validate_unique_item_ids(cls, items: List[SectionItem], info):
        seen = set()
        for item in items:
            if item.id in seen:
                raise ValueError(f"duplicate item id {item.id} in {to_camel(info.field_name)}")
            seen.add(item.id)
        return items

    def section_values(self) -> Dict[str, object]:
        """Plain JSON values per storage column"""
        return {
            "about": self.about.model_dump(mode="json"),
            **{
                name: [item.model_dump(mode="json") for item in getattr(self, name)]
                for name in SECTION_ITEM_MODELS
            },
        }


class ProfileResponse(ProfileDocument):
    user_id: str
    public_link_key: str


class PublicProfileResponse(BaseModel):
    """Public view: the owner's display name and the document, nothing else"""
    username: str
    profile: ProfileDocument


class ShareLinkResponse(_CamelModel):
    public_link_key: str
    url: str
