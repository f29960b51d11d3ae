"""
Typed records for the OpenAlex payloads we consume and the proposal fixtures.

Upstream responses are validated against these models at the client boundary
so the rest of the backend never handles raw, untrusted JSON.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def inverted_index_to_text(inverted_index: Optional[Dict[str, List[int]]]) -> str:
    """Rebuild abstract text from an OpenAlex ``abstract_inverted_index``."""
    if not inverted_index:
        return ""
    positioned = [
        (position, word)
        for word, positions in inverted_index.items()
        for position in positions
    ]
    positioned.sort(key=lambda item: item[0])
    return " ".join(word for _, word in positioned)


class CatalogModel(BaseModel):
    """Base for catalog records; tolerant of extra fields, strict on required ones."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def _empty_list_if_none(value: Any) -> Any:
    return [] if value is None else value


def _zero_if_none(value: Any) -> Any:
    return 0 if value is None else value


class Concept(CatalogModel):
    """Weighted topic tag attached to a researcher, institution or work."""

    id: str
    display_name: str
    level: int = 0
    score: float = 0.0
    wikidata: Optional[str] = None

    @field_validator("level", "score", mode="before")
    @classmethod
    def _default_numbers(cls, value: Any) -> Any:
        return _zero_if_none(value)


class SummaryStats(CatalogModel):
    h_index: int = 0
    i10_index: int = 0
    two_year_mean_citedness: float = Field(default=0.0, alias="2yr_mean_citedness")

    @field_validator("h_index", "i10_index", "two_year_mean_citedness", mode="before")
    @classmethod
    def _default_numbers(cls, value: Any) -> Any:
        return _zero_if_none(value)


class Affiliation(CatalogModel):
    """Flattened institution reference as embedded in author and work records."""

    id: str
    display_name: str
    ror: Optional[str] = None
    country_code: Optional[str] = None
    type: Optional[str] = None


class YearCount(CatalogModel):
    year: int
    works_count: int = 0
    cited_by_count: int = 0


class Researcher(CatalogModel):
    """An OpenAlex author record."""

    id: str
    display_name: str
    orcid: Optional[str] = None
    works_count: int = 0
    cited_by_count: int = 0
    summary_stats: SummaryStats = Field(default_factory=SummaryStats)
    last_known_institutions: List[Affiliation] = Field(default_factory=list)
    x_concepts: List[Concept] = Field(default_factory=list)
    counts_by_year: List[YearCount] = Field(default_factory=list)
    works_api_url: Optional[str] = None
    updated_date: Optional[str] = None

    @field_validator("last_known_institutions", "x_concepts", "counts_by_year", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> Any:
        return _empty_list_if_none(value)

    @field_validator("works_count", "cited_by_count", mode="before")
    @classmethod
    def _counts(cls, value: Any) -> Any:
        return _zero_if_none(value)

    @field_validator("summary_stats", mode="before")
    @classmethod
    def _stats(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def h_index(self) -> int:
        return self.summary_stats.h_index


class InstitutionType(str, Enum):
    EDUCATION = "education"
    HEALTHCARE = "healthcare"
    COMPANY = "company"
    ARCHIVE = "archive"
    NONPROFIT = "nonprofit"
    GOVERNMENT = "government"
    FACILITY = "facility"
    OTHER = "other"


class Geo(CatalogModel):
    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Institution(CatalogModel):
    """An OpenAlex institution record."""

    id: str
    display_name: str
    ror: Optional[str] = None
    country_code: Optional[str] = None
    type: InstitutionType = InstitutionType.OTHER
    homepage_url: Optional[str] = None
    image_url: Optional[str] = None
    works_count: int = 0
    cited_by_count: int = 0
    summary_stats: Optional[SummaryStats] = None
    geo: Optional[Geo] = None
    x_concepts: List[Concept] = Field(default_factory=list)
    updated_date: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> Any:
        if value is None:
            return InstitutionType.OTHER
        try:
            return InstitutionType(str(value).lower())
        except ValueError:
            return InstitutionType.OTHER

    @field_validator("x_concepts", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> Any:
        return _empty_list_if_none(value)

    @field_validator("works_count", "cited_by_count", mode="before")
    @classmethod
    def _counts(cls, value: Any) -> Any:
        return _zero_if_none(value)


class WorkAuthor(CatalogModel):
    id: Optional[str] = None
    display_name: Optional[str] = None
    orcid: Optional[str] = None


class Authorship(CatalogModel):
    author_position: Optional[str] = None
    author: WorkAuthor = Field(default_factory=WorkAuthor)
    institutions: List[Affiliation] = Field(default_factory=list)

    @field_validator("institutions", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> Any:
        return _empty_list_if_none(value)


class Work(CatalogModel):
    """An OpenAlex work with its abstract rebuilt as plain text."""

    id: str
    doi: Optional[str] = None
    title: Optional[str] = None
    display_name: Optional[str] = None
    publication_year: Optional[int] = None
    publication_date: Optional[str] = None
    type: Optional[str] = None
    cited_by_count: int = 0
    is_retracted: bool = False
    is_paratext: bool = False
    authorships: List[Authorship] = Field(default_factory=list)
    concepts: List[Concept] = Field(default_factory=list)
    open_access: Optional[Dict[str, Any]] = None
    abstract_inverted_index: Optional[Dict[str, List[int]]] = Field(default=None, exclude=True)
    abstract: str = ""

    @field_validator("authorships", "concepts", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> Any:
        return _empty_list_if_none(value)

    @field_validator("cited_by_count", mode="before")
    @classmethod
    def _counts(cls, value: Any) -> Any:
        return _zero_if_none(value)

    @field_validator("is_retracted", "is_paratext", mode="before")
    @classmethod
    def _flags(cls, value: Any) -> Any:
        return bool(value)

    @model_validator(mode="after")
    def _fill_abstract(self) -> "Work":
        if not self.abstract and self.abstract_inverted_index:
            self.abstract = inverted_index_to_text(self.abstract_inverted_index)
        return self


class PageMeta(CatalogModel):
    count: int = 0
    page: Optional[int] = None
    per_page: Optional[int] = None
    db_response_time_ms: Optional[int] = None

    def to_response(self) -> Dict[str, Any]:
        return {"count": self.count, "page": self.page, "perPage": self.per_page}


class Page(CatalogModel, Generic[T]):
    """One page of a list endpoint: ``{results, meta}``."""

    results: List[T] = Field(default_factory=list)
    meta: PageMeta = Field(default_factory=PageMeta)

    @field_validator("results", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> Any:
        return _empty_list_if_none(value)


# Proposals -------------------------------------------------------------------


class ProposalModel(BaseModel):
    """Proposal records use camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Company(ProposalModel):
    name: str
    industry: str
    logo: Optional[str] = None


class Budget(ProposalModel):
    min: int
    max: int
    currency: str = "USD"

    @model_validator(mode="after")
    def _ordered(self) -> "Budget":
        if self.min > self.max:
            raise ValueError("budget minimum exceeds maximum")
        return self


class MatchingCriteria(ProposalModel):
    min_h_index: Optional[int] = None
    min_citations: Optional[int] = None
    required_expertise: List[str] = Field(default_factory=list)
    preferred_institutions: Optional[List[str]] = None


class Proposal(ProposalModel):
    id: str
    title: str
    company: Company
    description: str
    research_area: List[str] = Field(default_factory=list)
    budget: Budget
    duration: str
    requirements: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    deadline: str
    posted_date: str
    status: Literal["open", "in-review", "closed"] = "open"
    matching_criteria: MatchingCriteria
    contact_email: str

    def searchable_text(self) -> str:
        parts = [
            self.title,
            self.company.name,
            self.company.industry,
            self.description,
            " ".join(self.research_area),
            " ".join(self.matching_criteria.required_expertise),
        ]
        return "\n".join(parts).lower()

    def summary(self) -> Dict[str, Any]:
        """Context block returned alongside proposal matches."""
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company.to_json(),
            "matchingCriteria": self.matching_criteria.to_json(),
        }


class MatchResult(BaseModel):
    """A researcher annotated with a proposal-match score and its reasons."""

    researcher: Researcher
    score: int = Field(ge=0, le=100)
    reasons: List[str] = Field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        payload = self.researcher.to_json()
        payload["matchScore"] = self.score
        payload["matchReasons"] = list(self.reasons)
        return payload
