"""
Flask backend for the Convergent research-collaboration demo.

This backend exposes REST endpoints that wrap the OpenAlex API to provide
researcher and institution search with match scores, researcher profiles, and
a board of industry collaboration proposals matched against a researcher
roster. The endpoints are designed to be consumed by the Next.js front-end.
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

import config
from aggregation import AggregationService
from errors import ApiError, InternalError, ValidationError
from mock_data import DEMO_DATA
from openalex_client import OpenAlexClient, SearchFilters
from proposals import ProposalMatchService, ProposalService

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))

app = Flask(__name__)
# Enable CORS so the front-end can call this API from a different port.
CORS(app, origins=[origin.strip() for origin in config.CORS_ALLOW_ORIGINS.split(",")])

# One client per process so every request shares the same throttle gate.
CATALOG = OpenAlexClient()
AGGREGATION = AggregationService(CATALOG)
PROPOSALS = ProposalService(DEMO_DATA)
MATCHES = ProposalMatchService(DEMO_DATA)


def int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    """Read an integer query parameter; blank means ``default``."""
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Parameter '{name}' must be an integer") from None


def page_args() -> tuple[int, int]:
    page = int_arg("page", 1)
    per_page = int_arg("per_page", config.DEFAULT_PER_PAGE)
    if page < 1:
        raise ValidationError("Parameter 'page' must be at least 1")
    return page, max(1, min(per_page, config.MAX_PER_PAGE))


@app.errorhandler(ApiError)
def handle_api_error(exc: ApiError):
    if exc.status_code >= 500:
        app.logger.error("%s %s failed: %s", request.method, request.path, exc.message)
    return jsonify(exc.to_dict()), exc.status_code


@app.errorhandler(Exception)
def handle_unexpected_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return jsonify({"error": exc.description}), exc.code
    app.logger.exception("Unhandled error on %s %s", request.method, request.path)
    error = InternalError("Internal server error")
    return jsonify(error.to_dict()), error.status_code


@app.route("/api/health")
def health_check():
    """Return a simple status message for health checks."""
    return jsonify({"status": "ok"})


@app.route("/api/search")
def search():
    """Search authors (ranked by match score) or institutions."""
    query = (request.args.get("q") or "").strip()
    if not query:
        raise ValidationError("Query parameter 'q' is required")
    category = request.args.get("category") or "authors"
    page, per_page = page_args()

    filters = SearchFilters(
        country=request.args.get("country") or None,
        institution=request.args.get("institution") or None,
        concept_id=request.args.get("concept") or None,
        min_h_index=int_arg("min_h_index"),
        min_citations=int_arg("min_citations"),
        institution_type=request.args.get("institution_type") or None
    )
    return jsonify(AGGREGATION.search(category, query, filters, page, per_page))


@app.route("/api/researcher/", defaults={"researcher_id": ""})
@app.route("/api/researcher/<path:researcher_id>")
def get_researcher(researcher_id: str):
    """Return an author with their most-cited works and top concepts."""
    return jsonify(AGGREGATION.researcher_profile(researcher_id))


@app.route("/api/institution/<path:institution_id>")
def get_institution(institution_id: str):
    """Return an institution with its top concepts."""
    return jsonify(AGGREGATION.institution_profile(institution_id))


@app.route("/api/institutions/autocomplete")
def autocomplete_institutions():
    """Suggest institutions for a partial name."""
    query = (request.args.get("q") or "").strip()
    if not query:
        raise ValidationError("Query parameter 'q' is required")
    return jsonify({"institutions": CATALOG.autocomplete_institutions(query)})


@app.route("/api/concepts")
def get_concepts():
    """Return the most-used concepts, optionally narrowed to a field."""
    field = (request.args.get("field") or "").strip() or None
    return jsonify({"concepts": CATALOG.get_top_concepts(field)})


@app.route("/api/proposals")
def list_proposals():
    """List proposals visible to the demo role, filtered and paginated."""
    page, per_page = page_args()
    role = request.args.get("role") or "faculty"
    query = request.args.get("query") or ""
    return jsonify(PROPOSALS.list_proposals(query, page, per_page, role))


@app.route("/api/proposals/<proposal_id>")
def get_proposal(proposal_id: str):
    return jsonify(PROPOSALS.get_proposal(proposal_id).to_json())


@app.route("/api/proposals/<proposal_id>/matches")
def get_proposal_matches(proposal_id: str):
    """Rank the researcher roster against a proposal's criteria."""
    outcome = MATCHES.find_matches(proposal_id)
    results = [match.to_json() for match in outcome["results"]]
    return jsonify({
        "results": results,
        "proposal": outcome["proposal"].summary(),
        "meta": {
            "count": len(results),
            "page": 1,
            "perPage": config.DEFAULT_PER_PAGE
        }
    })


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True, threaded=True)
