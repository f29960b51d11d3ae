"""
Proposal board listing and proposal-to-researcher matching.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

import config
from errors import NotFoundError, ValidationError
from mock_data import DemoData
from schemas import MatchResult, Proposal, Researcher
from scoring import build_match_reasons

logger = logging.getLogger(__name__)

ROLES = ("company", "faculty", "admin")


def paginate(items: List[Any], page: int, per_page: int) -> List[Any]:
    start = (page - 1) * per_page
    return items[start:start + per_page]


class ProposalService:
    """Role-aware, searchable listing of the proposal fixtures."""

    def __init__(self, data: DemoData, *, demo_company: str = config.DEMO_COMPANY) -> None:
        self.data = data
        self.demo_company = demo_company

    def get_proposal(self, proposal_id: str) -> Proposal:
        proposal = self.data.proposal(proposal_id)
        if proposal is None:
            raise NotFoundError("Proposal not found")
        return proposal

    def visible_to(self, role: str) -> List[Proposal]:
        """Company users only see their own proposals; faculty and admins see all."""
        if role not in ROLES:
            raise ValidationError(f"Unknown role '{role}'")
        proposals = self.data.proposals()
        if role == "company":
            proposals = [item for item in proposals if item.company.name == self.demo_company]
        return proposals

    def list_proposals(
        self,
        query: str = "",
        page: int = 1,
        per_page: int = config.DEFAULT_PER_PAGE,
        role: str = "faculty"
    ) -> Dict[str, Any]:
        if page < 1:
            raise ValidationError("Parameter 'page' must be at least 1")
        per_page = max(1, min(per_page, config.MAX_PER_PAGE))

        proposals = self.visible_to(role)
        needle = (query or "").strip().lower()
        if needle:
            proposals = [item for item in proposals if needle in item.searchable_text()]

        total = len(proposals)
        return {
            "proposals": [item.to_json() for item in paginate(proposals, page, per_page)],
            "meta": {
                "total": total,
                "page": page,
                "perPage": per_page,
                "totalPages": math.ceil(total / per_page)
            }
        }


class ProposalMatchService:
    """Ranks a researcher roster against one proposal's matching criteria."""

    def __init__(self, data: DemoData, *, threshold: int = config.MATCH_SCORE_THRESHOLD) -> None:
        self.data = data
        self.threshold = threshold

    def find_matches(self, proposal_id: str, roster: Optional[List[Researcher]] = None) -> Dict[str, Any]:
        """Score every roster member, best first.

        Members scoring below ``threshold`` are dropped; the default threshold
        of 0 keeps the whole roster.
        """
        proposal = self.data.proposal(proposal_id)
        if proposal is None:
            raise NotFoundError("Proposal not found")
        if roster is None:
            roster = self.data.roster()

        matches: List[MatchResult] = []
        for researcher in roster:
            score, reasons = build_match_reasons(researcher, proposal.matching_criteria)
            matches.append(MatchResult(researcher=researcher, score=score, reasons=reasons))
        matches.sort(key=lambda match: match.score, reverse=True)
        kept = [match for match in matches if match.score >= self.threshold]

        logger.info(
            "Proposal %s matched %d of %d researchers (threshold=%d)",
            proposal.id,
            len(kept),
            len(matches),
            self.threshold
        )
        return {
            "results": kept,
            "proposal": proposal
        }
