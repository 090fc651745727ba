"""Pydantic models for catalog metadata and the distilled aggregate."""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator, AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter

_url_adapter = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    # Validate shape only; the stored string is kept exactly as written
    _url_adapter.validate_python(value)
    return value


UrlString = Annotated[str, AfterValidator(_check_url)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DappContent(_CamelModel):
    """Page copy for an entry."""

    short: str = Field(max_length=160)
    description: str  # Markdown supported
    meta: str = Field(max_length=160)  # SEO description
    page_title: str = Field(alias="pageTitle")


class DappLinks(BaseModel):
    """Outbound links by channel. Only website is required."""

    website: UrlString
    github: Optional[UrlString] = None
    docs: Optional[UrlString] = None
    twitter: Optional[UrlString] = None
    telegram: Optional[UrlString] = None
    discord: Optional[UrlString] = None

    def channels(self) -> list[tuple[str, str]]:
        """Channels that carry a URL, in declaration order."""
        return [(name, value) for name, value in self.model_dump().items() if value]


class DappRelations(BaseModel):
    alternatives: list[str]
    related: list[str]

    def all(self) -> list[str]:
        return [*self.alternatives, *self.related]


class DappSource(_CamelModel):
    fully_scraped: bool = Field(default=True, alias="fullyScraped")


class DappMeta(_CamelModel):
    """Contents of one entry's meta.json.

    slug must match the containing folder name; validation checks that,
    distillation does not.
    """

    slug: str
    name: str
    logo_url: str = Field(alias="logoUrl")  # "./logo.png" or "https://..."
    category: str
    chains: list[str]
    tags: list[str]
    pricing: str
    content: DappContent
    links: DappLinks
    relations: DappRelations
    source: Optional[DappSource] = None


class AppSummary(_CamelModel):
    """Compact projection of an entry stored in apps.min.json."""

    slug: str
    name: str
    logo_url: str = Field(alias="logoUrl")
    category: str
    chains: list[str]
    tags: list[str]
    pricing: str
    short: str
    updated_at: str = Field(alias="updatedAt")  # ISO-8601 UTC

    @classmethod
    def from_meta(
        cls, meta: DappMeta, logo_url: str, now: Optional[datetime] = None
    ) -> "AppSummary":
        now = now or datetime.now(timezone.utc)
        return cls(
            slug=meta.slug,
            name=meta.name,
            logo_url=logo_url,
            category=meta.category,
            chains=list(meta.chains),
            tags=list(meta.tags),
            pricing=meta.pricing,
            short=meta.content.short,
            updated_at=now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)
