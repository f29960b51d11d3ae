"""
Tests for query scoring, proposal-criteria scoring and concept ranking.
"""

import pytest

from schemas import Concept, MatchingCriteria
from scoring import (
    build_match_reasons,
    clamp_score,
    matched_expertise,
    score_against_query,
    top_concepts,
)


def concept(concept_id, name, score, level=1):
    return {"id": concept_id, "display_name": name, "level": level, "score": score}


class TestScoreAgainstQuery:
    def test_worked_example(self, make_researcher):
        researcher = make_researcher(
            name="Dr. Sarah Chen",
            h_index=32,
            cited_by_count=4523,
            works_count=127,
            concepts=[concept("C1", "Bioinformatics", 88.6)],
        )
        # 50 + 16 + 0.4523 + 2.54 = 68.99
        assert score_against_query(researcher, "AI") == 69

    def test_name_match_adds_ten(self, make_researcher):
        plain = make_researcher(name="Grace Hopper", h_index=0, cited_by_count=0, works_count=0)
        assert score_against_query(plain, "turing") == 50
        assert score_against_query(plain, "HOPPER") == 60

    def test_concept_match_adds_five(self, make_researcher):
        researcher = make_researcher(
            name="Grace Hopper",
            h_index=0,
            cited_by_count=0,
            works_count=0,
            concepts=[concept("C1", "Compiler Design", 70.0)],
        )
        assert score_against_query(researcher, "compiler") == 55

    def test_capped_at_one_hundred(self, make_researcher):
        star = make_researcher(
            name="Quantum Star",
            h_index=400,
            cited_by_count=10_000_000,
            works_count=5000,
            concepts=[concept("C1", "Quantum Computing", 99.0)],
        )
        assert score_against_query(star, "quantum") == 100

    @pytest.mark.parametrize("h_index, cited, works", [
        (0, 0, 0), (1, 1, 1), (49, 149_999, 499), (50, 150_000, 500), (1000, 10**9, 10**5),
    ])
    def test_integer_in_range(self, make_researcher, h_index, cited, works):
        score = score_against_query(
            make_researcher(h_index=h_index, cited_by_count=cited, works_count=works), "ada"
        )
        assert isinstance(score, int)
        assert 0 <= score <= 100

    @pytest.mark.parametrize("field", ["h_index", "cited_by_count", "works_count"])
    def test_monotonic_in_each_metric(self, make_researcher, field):
        previous = None
        for value in [0, 1, 5, 20, 60, 300, 5000, 200_000]:
            score = score_against_query(make_researcher(**{field: value}), "nothing")
            if previous is not None:
                assert score >= previous
            previous = score

    def test_deterministic(self, make_researcher):
        researcher = make_researcher(h_index=17, cited_by_count=2345, works_count=81)
        assert score_against_query(researcher, "ada") == score_against_query(researcher, "ada")

    def test_rounds_half_up(self):
        assert clamp_score(68.5) == 69
        assert clamp_score(-3) == 0
        assert clamp_score(120.2) == 100


class TestBuildMatchReasons:
    def test_expertise_in_requirement_order(self, sarah_chen):
        criteria = MatchingCriteria(
            required_expertise=["Machine Learning", "Drug Discovery", "Bioinformatics"]
        )
        _, reasons = build_match_reasons(sarah_chen, criteria)
        assert reasons == [
            "H-Index: 32",
            "Citations: 4,523",
            "Expertise: Machine Learning, Drug Discovery, Bioinformatics",
        ]

    def test_expertise_matches_both_directions(self, make_researcher):
        researcher = make_researcher(concepts=[
            concept("C1", "Deep Learning", 90.0),
            concept("C2", "Chemistry", 60.0),
        ])
        required = ["learning", "Computational Chemistry", "Robotics"]
        assert matched_expertise(researcher, required) == ["learning", "Computational Chemistry"]

    def test_no_expertise_line_without_matches(self, make_researcher):
        researcher = make_researcher(concepts=[concept("C1", "Ecology", 80.0)])
        _, reasons = build_match_reasons(
            researcher, MatchingCriteria(required_expertise=["Quantum Computing"])
        )
        assert len(reasons) == 2
        assert not any(reason.startswith("Expertise") for reason in reasons)

    def test_full_marks_when_every_criterion_met(self, make_researcher):
        researcher = make_researcher(
            h_index=40,
            cited_by_count=9000,
            concepts=[concept("C1", "Robotics", 80.0)],
        )
        criteria = MatchingCriteria(
            min_h_index=10,
            min_citations=1000,
            required_expertise=["Robotics"],
            preferred_institutions=["Example University"],
        )
        score, reasons = build_match_reasons(researcher, criteria)
        assert score == 100
        assert reasons[-1] == "Preferred institution: Example University"

    def test_partial_credit_below_thresholds(self, make_researcher):
        researcher = make_researcher(h_index=5, cited_by_count=500, concepts=[])
        criteria = MatchingCriteria(
            min_h_index=10,
            min_citations=1000,
            required_expertise=["Robotics", "Vision"],
        )
        score, _ = build_match_reasons(researcher, criteria)
        # expertise 0 + h-index 10 + citations 10 + institution 10 (no preference)
        assert score == 30

    def test_reference_roster_member(self, sarah_chen):
        criteria = MatchingCriteria(
            min_h_index=15,
            min_citations=1000,
            required_expertise=["Machine Learning", "Drug Discovery", "Bioinformatics"],
            preferred_institutions=["MIT", "Stanford", "Harvard"],
        )
        score, _ = build_match_reasons(sarah_chen, criteria)
        assert score == 90

    @pytest.mark.parametrize("affiliation", ["Smith College", "Summit University", "Emitt Institute"])
    def test_acronym_does_not_match_inside_words(self, make_researcher, affiliation):
        researcher = make_researcher(institution=affiliation)
        criteria = MatchingCriteria(preferred_institutions=["MIT", "Stanford", "Harvard"])
        score, reasons = build_match_reasons(researcher, criteria)
        assert not any(reason.startswith("Preferred institution") for reason in reasons)
        assert score == 90

    def test_institution_matches_on_whole_words(self, make_researcher):
        researcher = make_researcher(institution="Massachusetts Institute of Technology (MIT)")
        _, reasons = build_match_reasons(researcher, MatchingCriteria(preferred_institutions=["mit"]))
        assert reasons[-1] == "Preferred institution: Massachusetts Institute of Technology (MIT)"

        researcher = make_researcher(institution="Stanford")
        _, reasons = build_match_reasons(
            researcher, MatchingCriteria(preferred_institutions=["Stanford University"])
        )
        assert reasons[-1] == "Preferred institution: Stanford"


class TestTopConcepts:
    def test_duplicate_names_keep_highest_score(self):
        concepts = [
            Concept(id="A", display_name="ML", score=90),
            Concept(id="B", display_name="ML", score=95),
        ]
        assert [(item.id, item.score) for item in top_concepts(concepts)] == [("B", 95)]

    def test_sorted_and_limited(self):
        concepts = [Concept(id=f"C{i}", display_name=f"Topic {i}", score=i) for i in range(15)]
        ranked = top_concepts(concepts, limit=10)
        assert [item.score for item in ranked] == list(range(14, 4, -1))
