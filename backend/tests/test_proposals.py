"""
Tests for the proposal board listing and proposal matching.
"""

import copy

import pytest

from errors import NotFoundError, ValidationError
from fakes import author_payload
from mock_data import DEMO_DATA, DemoData, PROPOSALS, ROSTER
from proposals import ProposalMatchService, ProposalService
from schemas import Researcher


class TestDemoData:
    def test_fixtures_validate(self):
        assert len(DEMO_DATA.proposals()) == 8
        assert len(DEMO_DATA.roster()) == 2

    def test_roster_copies_are_independent(self, demo_data):
        first = demo_data.roster()
        first[0].x_concepts.clear()
        assert demo_data.roster()[0].x_concepts

    def test_proposal_json_uses_camel_case(self, demo_data):
        payload = demo_data.proposal("prop-001").to_json()
        assert payload["researchArea"][0] == "Machine Learning"
        assert payload["matchingCriteria"]["minHIndex"] == 15
        assert payload["postedDate"] == "2025-10-15"
        assert "preferredInstitutions" not in demo_data.proposal("prop-002").to_json()["matchingCriteria"]


class TestListProposals:
    def test_faculty_sees_everything(self, demo_data):
        result = ProposalService(demo_data).list_proposals(role="faculty")
        assert result["meta"] == {"total": 8, "page": 1, "perPage": 20, "totalPages": 1}
        assert [item["id"] for item in result["proposals"]][:2] == ["prop-001", "prop-002"]

    def test_admin_sees_everything(self, demo_data):
        assert ProposalService(demo_data).list_proposals(role="admin")["meta"]["total"] == 8

    def test_company_sees_only_its_own(self, demo_data):
        result = ProposalService(demo_data, demo_company="BioTech Innovations Inc.").list_proposals(role="company")
        assert [item["id"] for item in result["proposals"]] == ["prop-001"]

    def test_unknown_role(self, demo_data):
        with pytest.raises(ValidationError):
            ProposalService(demo_data).list_proposals(role="student")

    def test_query_matches_case_insensitively_across_fields(self, demo_data):
        service = ProposalService(demo_data)
        assert [p["id"] for p in service.list_proposals(query="QUANTUM")["proposals"]] == ["prop-002"]
        # industry
        assert [p["id"] for p in service.list_proposals(query="logistics")["proposals"]] == ["prop-008"]
        # required expertise only
        assert [p["id"] for p in service.list_proposals(query="energy storage")["proposals"]] == ["prop-003"]
        assert service.list_proposals(query="no such topic")["meta"]["total"] == 0

    def test_offset_pagination(self, demo_data):
        service = ProposalService(demo_data)
        result = service.list_proposals(page=3, per_page=3)
        assert [item["id"] for item in result["proposals"]] == ["prop-007", "prop-008"]
        assert result["meta"] == {"total": 8, "page": 3, "perPage": 3, "totalPages": 3}
        assert service.list_proposals(page=9, per_page=3)["proposals"] == []

    def test_invalid_page(self, demo_data):
        with pytest.raises(ValidationError):
            ProposalService(demo_data).list_proposals(page=0)

    def test_get_proposal(self, demo_data):
        service = ProposalService(demo_data)
        assert service.get_proposal("prop-004").title == "Edge AI for Smart Manufacturing"
        with pytest.raises(NotFoundError):
            service.get_proposal("prop-999")


class TestFindMatches:
    def test_unknown_proposal(self, demo_data):
        with pytest.raises(NotFoundError):
            ProposalMatchService(demo_data).find_matches("prop-999")

    def test_proposal_missing_from_known_set(self):
        data = DemoData([item for item in copy.deepcopy(PROPOSALS) if item["id"] != "prop-001"], ROSTER)
        with pytest.raises(NotFoundError):
            ProposalMatchService(data).find_matches("prop-001")

    def test_whole_roster_annotated_by_default(self, demo_data):
        outcome = ProposalMatchService(demo_data, threshold=0).find_matches("prop-001")
        results = outcome["results"]
        assert [match.researcher.display_name for match in results] == ["Dr. Sarah Chen", "Dr. Michael Rodriguez"]
        assert [match.score for match in results] == [90, 90]
        assert results[0].reasons == [
            "H-Index: 32",
            "Citations: 4,523",
            "Expertise: Machine Learning, Drug Discovery, Bioinformatics",
        ]
        assert outcome["proposal"].summary()["company"]["name"] == "BioTech Innovations Inc."

    def test_results_ranked_best_first(self, demo_data):
        roster = [
            Researcher.model_validate(author_payload(author_id="A1", name="Novice", h_index=1, cited_by_count=10)),
            Researcher.model_validate(copy.deepcopy(ROSTER[1])),
        ]
        results = ProposalMatchService(demo_data).find_matches("prop-004", roster)["results"]
        assert results[0].researcher.display_name == "Dr. Michael Rodriguez"
        assert "Expertise: Deep Learning" in results[0].reasons
        assert results[0].score > results[1].score

    def test_threshold_filters_weak_candidates(self, demo_data):
        roster = [
            Researcher.model_validate(author_payload(author_id="A1", name="Novice", h_index=1, cited_by_count=10)),
            Researcher.model_validate(copy.deepcopy(ROSTER[0])),
        ]
        results = ProposalMatchService(demo_data, threshold=60).find_matches("prop-001", roster)["results"]
        assert [match.researcher.id for match in results] == [ROSTER[0]["id"]]

    def test_match_json_spreads_researcher(self, demo_data):
        match = ProposalMatchService(demo_data).find_matches("prop-001")["results"][0]
        payload = match.to_json()
        assert payload["display_name"] == "Dr. Sarah Chen"
        assert payload["matchScore"] == 90
        assert payload["matchReasons"][0] == "H-Index: 32"
