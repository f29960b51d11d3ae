"""
Relevance scoring for researchers.

Two scores live here: the query score used to rank author search results, and
the criteria score used to rank a roster against a proposal. Both are pure
functions of their inputs and always land on an integer in [0, 100].
"""

from __future__ import annotations

import math
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from schemas import Affiliation, Concept, MatchingCriteria, Researcher

QUERY_BASE_SCORE = 50.0

# Criteria score weights; they add up to 100.
EXPERTISE_WEIGHT = 50.0
H_INDEX_WEIGHT = 20.0
CITATION_WEIGHT = 20.0
INSTITUTION_WEIGHT = 10.0


def clamp_score(value: float) -> int:
    """Clamp a floating-point score into an integer [0, 100], rounding half up."""
    return int(math.floor(max(0.0, min(100.0, value)) + 0.5))


def score_against_query(researcher: Researcher, query: str) -> int:
    """Score how well an author answers a free-text query."""
    score = QUERY_BASE_SCORE
    score += min(researcher.h_index / 2, 25)
    score += min(researcher.cited_by_count / 10000, 15)
    score += min(researcher.works_count / 50, 10)

    needle = query.strip().lower()
    if needle:
        if needle in researcher.display_name.lower():
            score += 10
        if any(needle in concept.display_name.lower() for concept in researcher.x_concepts):
            score += 5
    return clamp_score(score)


def _overlaps(left: str, right: str) -> bool:
    left = left.lower()
    right = right.lower()
    return left in right or right in left


def matched_expertise(researcher: Researcher, required: Iterable[str]) -> List[str]:
    """Required terms that some topic tag contains, or is contained in."""
    names = [concept.display_name for concept in researcher.x_concepts]
    return [term for term in required if any(_overlaps(term, name) for name in names)]


def _contains_words(haystack: str, needle: str) -> bool:
    return re.search(rf"\b{re.escape(needle)}\b", haystack, re.IGNORECASE) is not None


def matched_institution(
    affiliations: Sequence[Affiliation],
    preferred: Optional[Sequence[str]]
) -> Optional[str]:
    """First affiliation naming a preferred institution as whole words, either way round."""
    if not preferred:
        return None
    for affiliation in affiliations:
        if not affiliation.display_name.strip():
            continue
        for name in preferred:
            name = (name or "").strip()
            if not name:
                continue
            if _contains_words(affiliation.display_name, name) or _contains_words(name, affiliation.display_name):
                return affiliation.display_name
    return None


def _threshold_ratio(value: int, minimum: Optional[int]) -> float:
    if not minimum or minimum <= 0:
        return 1.0
    return min(1.0, max(0.0, value / minimum))


def build_match_reasons(researcher: Researcher, criteria: MatchingCriteria) -> Tuple[int, List[str]]:
    """Score a researcher against proposal criteria and explain the result.

    The score is a weighted criteria satisfaction:

    * expertise: share of required terms matched (full when none required)
    * h-index and citations: full when the minimum is met, proportional below
    * preferred institution: full on a match or when no preference is stated
    """
    reasons = [
        f"H-Index: {researcher.h_index}",
        f"Citations: {researcher.cited_by_count:,}",
    ]

    required = criteria.required_expertise
    expertise = matched_expertise(researcher, required)
    if expertise:
        reasons.append(f"Expertise: {', '.join(expertise)}")
    expertise_ratio = len(expertise) / len(required) if required else 1.0

    institution = matched_institution(researcher.last_known_institutions, criteria.preferred_institutions)
    if institution:
        reasons.append(f"Preferred institution: {institution}")
    if not criteria.preferred_institutions:
        institution_ratio = 1.0
    else:
        institution_ratio = 1.0 if institution else 0.0

    score = (
        EXPERTISE_WEIGHT * expertise_ratio
        + H_INDEX_WEIGHT * _threshold_ratio(researcher.h_index, criteria.min_h_index)
        + CITATION_WEIGHT * _threshold_ratio(researcher.cited_by_count, criteria.min_citations)
        + INSTITUTION_WEIGHT * institution_ratio
    )
    return clamp_score(score), reasons


def top_concepts(concepts: Iterable[Concept], limit: int = 10) -> List[Concept]:
    """Highest-scored concepts, one per display name."""
    ranked = sorted(concepts, key=lambda concept: concept.score, reverse=True)
    seen: set[str] = set()
    unique: List[Concept] = []
    for concept in ranked:
        if concept.display_name in seen:
            continue
        seen.add(concept.display_name)
        unique.append(concept)
        if len(unique) >= limit:
            break
    return unique
