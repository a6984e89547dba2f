"""Search-related Pydantic schemas mirroring the JigsawStack web search reply."""

from pydantic import BaseModel, ConfigDict, Field


class SearchResult(BaseModel):
    """A single web source returned by the provider."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = Field(default="", description="Title of the page")
    url: str = Field(..., description="URL of the page")
    description: str = Field(default="", description="Page description, may contain HTML markup")
    content: str | None = Field(default=None, description="Extracted page content, if any")
    site_name: str = Field(default="", description="Short site name (e.g., 'Wikipedia')")
    site_long_name: str = Field(default="", description="Long site name (e.g., 'en.wikipedia.org')")
    age: str | None = Field(default=None, description="Age of the page as reported by the provider")
    language: str = Field(default="", description="Language code of the page")
    is_safe: bool = Field(default=True, description="Provider safe-search flag")
    favicon: str | None = Field(default=None, description="Favicon URL")
    thumbnail: str | None = Field(default=None, description="Thumbnail image URL")
    snippets: list[str] = Field(default_factory=list, description="Excerpts in provider order")


class SearchResponse(BaseModel):
    """Provider reply for one query.

    Immutable once received; ``results`` and ``image_urls`` keep provider order.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool = Field(default=True)
    query: str = Field(..., description="Echo of the submitted query")
    ai_overview: str = Field(default="", description="AI-generated overview of the results")
    is_safe: bool = Field(default=True)
    image_urls: list[str] = Field(default_factory=list)
    results: list[SearchResult] = Field(default_factory=list)
