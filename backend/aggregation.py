"""
Search-and-rank over the OpenAlex catalog.

Combines :class:`OpenAlexClient` lookups with :mod:`scoring`: deduplicates
upstream pages, attaches query scores to authors, and composes researcher
profiles from concurrent profile and works fetches.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, TypeVar

import config
from errors import ValidationError
from openalex_client import OpenAlexClient, SearchFilters
from schemas import Institution, Researcher
from scoring import score_against_query, top_concepts

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Researcher, Institution)

CATEGORIES = ("authors", "institutions")


def dedupe_by_id(records: Iterable[RecordT]) -> List[RecordT]:
    """Drop repeated identities, keeping the first occurrence in order."""
    seen: set[str] = set()
    unique: List[RecordT] = []
    for record in records:
        if record.id in seen:
            continue
        seen.add(record.id)
        unique.append(record)
    return unique


def rank_researchers(researchers: Iterable[Researcher], query: str) -> List[Dict[str, Any]]:
    """Attach ``matchScore`` and order by it; equal scores keep upstream order."""
    scored = []
    for researcher in researchers:
        payload = researcher.to_json()
        payload["matchScore"] = score_against_query(researcher, query)
        scored.append(payload)
    scored.sort(key=lambda item: item["matchScore"], reverse=True)
    return scored


class AggregationService:
    """Orchestrates catalog calls and scoring for the search and profile pages."""

    def __init__(self, client: OpenAlexClient, *, max_workers: int = config.PARALLEL_MAX_WORKERS) -> None:
        self.client = client
        self.max_workers = max(2, max_workers)

    def search(
        self,
        category: str,
        query: str,
        filters: Optional[SearchFilters] = None,
        page: int = 1,
        per_page: int = config.DEFAULT_PER_PAGE
    ) -> Dict[str, Any]:
        query = (query or "").strip()
        if not query:
            raise ValidationError("Query parameter 'q' is required")
        if category not in CATEGORIES:
            raise ValidationError(f"Unknown search category '{category}'")

        if category == "institutions":
            response = self.client.search_institutions(query, filters, page, per_page)
            results = [item.to_json() for item in dedupe_by_id(response.results)]
        else:
            response = self.client.search_authors(query, filters, page, per_page)
            results = rank_researchers(dedupe_by_id(response.results), query)

        logger.info(
            "Search category=%s query=%r returned %d of %d results",
            category,
            query,
            len(results),
            response.meta.count
        )
        return {"results": results, "meta": response.meta.to_response()}

    def researcher_profile(self, researcher_id: str) -> Dict[str, Any]:
        """Author record plus top-cited works and top concepts.

        The profile and works requests are issued together; both must succeed.
        """
        if not researcher_id or not researcher_id.strip():
            raise ValidationError("Researcher ID is required")

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            researcher_future = executor.submit(self.client.get_researcher, researcher_id)
            works_future = executor.submit(
                self.client.get_researcher_works, researcher_id, 1, config.RECENT_WORKS_LIMIT
            )
            try:
                researcher = researcher_future.result()
                works = works_future.result()
            except Exception:
                researcher_future.cancel()
                works_future.cancel()
                raise

        payload = researcher.to_json()
        payload["recentWorks"] = [work.to_json() for work in works.results[:config.RECENT_WORKS_LIMIT]]
        payload["topConcepts"] = [
            concept.to_json()
            for concept in top_concepts(researcher.x_concepts, config.TOP_CONCEPTS_LIMIT)
        ]
        return payload

    def institution_profile(self, institution_id: str) -> Dict[str, Any]:
        if not institution_id or not institution_id.strip():
            raise ValidationError("Institution ID is required")
        institution = self.client.get_institution(institution_id)
        payload = institution.to_json()
        payload["topConcepts"] = [
            concept.to_json()
            for concept in top_concepts(institution.x_concepts, config.TOP_CONCEPTS_LIMIT)
        ]
        return payload
