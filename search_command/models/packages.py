"""
Package search data models.

PackageRecord mirrors one entry of the NuGet search response. CardPackage is
the flattened view bound into the package adaptive card.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

NUGET_GALLERY_URL = "https://www.nuget.org/packages"
DEFAULT_ICON_URL = "https://www.nuget.org/Content/gallery/img/default-package-icon.svg"
DEFAULT_RESULT_COUNT = 25


class SearchQuery(BaseModel):
    """Free-text query and number of results to request."""
    model_config = ConfigDict(frozen=True)

    text: str = ""
    count: int = Field(default=DEFAULT_RESULT_COUNT, ge=0)


class PackageRecord(BaseModel):
    """
    One package from the search API.

    Only id and description are required. Every other field the API returns
    (version, totalDownloads, authors, ...) is kept as-is in model_extra.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(min_length=1)
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value

    def extra(self, key: str, default: Any = None) -> Any:
        """Read a pass-through field returned by the API."""
        return (self.model_extra or {}).get(key, default)


def _join(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value if item)
    return str(value)


class CardPackage(BaseModel):
    """Package fields shaped for the package card template."""
    model_config = ConfigDict(frozen=True)

    id: str
    version: str = ""
    description: str = ""
    authors: str = ""
    tags: str = ""
    total_downloads: int = 0
    icon_url: str = DEFAULT_ICON_URL
    project_url: str = ""
    nuget_url: str = ""
    verified: bool = False

    @classmethod
    def create(cls, record: PackageRecord) -> "CardPackage":
        nuget_url = f"{NUGET_GALLERY_URL}/{record.id}"
        version = record.extra("version") or ""
        if version:
            nuget_url = f"{nuget_url}/{version}"

        return cls(
            id=record.id,
            version=str(version),
            description=record.description,
            authors=_join(record.extra("authors")),
            tags=_join(record.extra("tags")),
            total_downloads=record.extra("totalDownloads") or 0,
            icon_url=record.extra("iconUrl") or DEFAULT_ICON_URL,
            project_url=record.extra("projectUrl") or nuget_url,
            nuget_url=nuget_url,
            verified=bool(record.extra("verified", False)),
        )


class PromptBinding(BaseModel):
    """Binding data for the designer card."""
    model_config = ConfigDict(frozen=True)

    PromptText: str

