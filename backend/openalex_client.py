"""
Throttled client for the OpenAlex REST API.

Wraps author, institution, work and concept lookups: builds the ``search`` and
``filter`` parameters, routes every request through a shared :class:`RateGate`,
retries transient failures with exponential backoff, and validates payloads
into the records defined in :mod:`schemas`.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel
from pydantic import ValidationError as PayloadValidationError

import config
from errors import NotFoundError, UpstreamError, UpstreamTimeoutError, ValidationError
from schemas import Concept, Institution, Page, Researcher, Work
from throttle import RateGate

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

MAX_PAGE_SIZE = 200

AUTHOR_SELECT = (
    "id,display_name,orcid,works_count,cited_by_count,summary_stats,"
    "last_known_institutions,x_concepts,counts_by_year,works_api_url,updated_date"
)
INSTITUTION_SELECT = (
    "id,display_name,ror,country_code,type,homepage_url,image_url,works_count,"
    "cited_by_count,summary_stats,geo,x_concepts,updated_date"
)


class SearchFilters(BaseModel):
    """Optional predicates narrowing an author or institution search."""

    country: Optional[str] = None
    institution: Optional[str] = None
    concept_id: Optional[str] = None
    min_h_index: Optional[int] = None
    min_citations: Optional[int] = None
    institution_type: Optional[str] = None


def short_openalex_id(identifier: Optional[str]) -> Optional[str]:
    """Return the short-form OpenAlex identifier (e.g., A123) from a URL."""
    if not identifier:
        return None
    identifier = identifier.strip()
    if identifier.startswith(("https://", "http://")):
        identifier = identifier.rstrip("/").rsplit("/", 1)[-1]
    return identifier or None


def build_author_filter(filters: Optional[SearchFilters]) -> Optional[str]:
    """Join author predicates into a comma-separated OpenAlex ``filter`` value."""
    if filters is None:
        return None
    parts: List[str] = []
    if filters.country:
        parts.append(f"last_known_institutions.country_code:{filters.country}")
    if filters.institution:
        parts.append(f"last_known_institutions.display_name:{filters.institution}")
    if filters.concept_id:
        parts.append(f"x_concepts.id:{filters.concept_id}")
    if filters.min_h_index:
        parts.append(f"summary_stats.h_index:>{filters.min_h_index}")
    if filters.min_citations:
        parts.append(f"cited_by_count:>{filters.min_citations}")
    return ",".join(parts) or None


def build_institution_filter(filters: Optional[SearchFilters]) -> Optional[str]:
    """Join institution predicates into a comma-separated OpenAlex ``filter`` value."""
    if filters is None:
        return None
    parts: List[str] = []
    if filters.country:
        parts.append(f"country_code:{filters.country}")
    if filters.min_citations:
        parts.append(f"cited_by_count:>{filters.min_citations}")
    if filters.institution_type:
        parts.append(f"type:{filters.institution_type}")
    return ",".join(parts) or None


def clamp_page(page: int, per_page: int) -> Dict[str, int]:
    return {
        "page": max(1, page),
        "per_page": max(1, min(per_page, MAX_PAGE_SIZE)),
    }


class OpenAlexClient:
    """Thin, throttled wrapper around the OpenAlex endpoints the app uses."""

    def __init__(
        self,
        base_url: str = config.OPENALEX_BASE_URL,
        *,
        mailto: Optional[str] = config.OPENALEX_MAILTO,
        user_agent: str = config.OPENALEX_USER_AGENT,
        gate: Optional[RateGate] = None,
        timeout: float = config.REQUEST_TIMEOUT_SECONDS,
        max_retries: int = config.MAX_RETRIES,
        backoff: float = config.RETRY_BACKOFF_SECONDS,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.mailto = mailto
        self.gate = gate or RateGate.from_milliseconds(config.REQUEST_INTERVAL_MS)
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self.backoff = backoff
        self._sleep = sleep
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "application/json"
        })

    # Transport ---------------------------------------------------------

    def _request(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Send one throttled GET and return the decoded JSON body."""
        url = f"{self.base_url}{endpoint}"
        self.gate.wait()
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise UpstreamTimeoutError(
                f"OpenAlex request timed out after {self.timeout:g}s"
            ) from exc
        except requests.RequestException as exc:
            raise UpstreamError(f"OpenAlex request failed: {exc}", transient=True) from exc

        if not response.ok:
            logger.error(
                "OpenAlex request failed: %s | status=%s body=%s",
                url,
                response.status_code,
                response.text[:500]
            )
            raise UpstreamError(
                f"OpenAlex API error: {response.status_code}",
                status=response.status_code
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                "OpenAlex returned a non-JSON body",
                status=response.status_code
            ) from exc
        if not isinstance(payload, dict):
            raise UpstreamError("OpenAlex returned an unexpected payload", status=response.status_code)
        return payload

    def fetch(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Call the OpenAlex API, retrying transient failures with backoff."""
        query_params: Dict[str, Any] = {}
        if params:
            query_params.update({key: value for key, value in params.items() if value is not None})
        if self.mailto and "mailto" not in query_params:
            query_params["mailto"] = self.mailto

        attempt = 0
        while True:
            try:
                return self._request(endpoint, query_params)
            except UpstreamError as exc:
                if not exc.transient or attempt >= self.max_retries:
                    raise
                delay = self.backoff * (2 ** attempt)
                attempt += 1
                logger.warning(
                    "Retrying OpenAlex %s in %.2fs (attempt %d/%d): %s",
                    endpoint,
                    delay,
                    attempt,
                    self.max_retries,
                    exc.message
                )
                if delay > 0:
                    self._sleep(delay)

    @staticmethod
    def _parse(model: Type[ModelT], payload: Dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(payload)
        except PayloadValidationError as exc:
            logger.error("Malformed OpenAlex payload for %s: %s", model.__name__, exc)
            raise UpstreamError(f"Malformed OpenAlex payload: {exc.error_count()} invalid field(s)") from exc

    def _fetch_record(self, collection: str, record_id: str, params: Dict[str, Any], label: str) -> Dict[str, Any]:
        short_id = short_openalex_id(record_id)
        if not short_id:
            raise ValidationError(f"{label} ID is required")
        try:
            return self.fetch(f"/{collection}/{short_id}", params)
        except UpstreamError as exc:
            if exc.status == 404:
                raise NotFoundError(f"{label} {short_id} not found") from exc
            raise

    # Authors -----------------------------------------------------------

    def search_authors(
        self,
        query: str,
        filters: Optional[SearchFilters] = None,
        page: int = 1,
        per_page: int = 20
    ) -> Page[Researcher]:
        """Full-text author search with conjunctive filters."""
        params: Dict[str, Any] = {
            "search": query,
            **clamp_page(page, per_page),
            "select": AUTHOR_SELECT,
            "filter": build_author_filter(filters)
        }
        payload = self.fetch("/authors", params)
        return self._parse(Page[Researcher], payload)

    def get_researcher(self, researcher_id: str) -> Researcher:
        """Fetch one author; accepts ``A123`` or ``https://openalex.org/A123``."""
        payload = self._fetch_record("authors", researcher_id, {"select": AUTHOR_SELECT}, "Researcher")
        return self._parse(Researcher, payload)

    def get_researcher_works(self, researcher_id: str, page: int = 1, per_page: int = 10) -> Page[Work]:
        """Works for an author, most cited first."""
        short_id = short_openalex_id(researcher_id)
        if not short_id:
            raise ValidationError("Researcher ID is required")
        params = {
            "filter": f"authorships.author.id:{short_id}",
            "sort": "cited_by_count:desc",
            **clamp_page(page, per_page)
        }
        payload = self.fetch("/works", params)
        return self._parse(Page[Work], payload)

    # Institutions ------------------------------------------------------

    def search_institutions(
        self,
        query: str,
        filters: Optional[SearchFilters] = None,
        page: int = 1,
        per_page: int = 20
    ) -> Page[Institution]:
        params: Dict[str, Any] = {
            "search": query,
            **clamp_page(page, per_page),
            "select": INSTITUTION_SELECT,
            "filter": build_institution_filter(filters)
        }
        payload = self.fetch("/institutions", params)
        return self._parse(Page[Institution], payload)

    def get_institution(self, institution_id: str) -> Institution:
        payload = self._fetch_record(
            "institutions", institution_id, {"select": INSTITUTION_SELECT}, "Institution"
        )
        return self._parse(Institution, payload)

    def autocomplete_institutions(self, query: str) -> List[Dict[str, Any]]:
        """Short institution list for type-ahead inputs."""
        payload = self.fetch("/institutions", {"search": query, "per_page": 10})
        page = self._parse(Page[Institution], payload)
        return [
            {
                "id": item.id,
                "display_name": item.display_name,
                "country_code": item.country_code
            }
            for item in page.results
        ]

    # Concepts ----------------------------------------------------------

    def get_top_concepts(self, field: Optional[str] = None) -> List[Dict[str, Any]]:
        """Most-used concepts, optionally narrowed by a display-name search."""
        params: Dict[str, Any] = {
            "per_page": 20,
            "sort": "works_count:desc"
        }
        if field:
            params["filter"] = f"display_name.search:{field}"
        payload = self.fetch("/concepts", params)
        page = self._parse(Page[Concept], payload)
        return [{"id": item.id, "display_name": item.display_name} for item in page.results]
