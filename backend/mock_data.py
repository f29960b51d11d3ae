"""
In-memory demo dataset: collaboration proposals and the researcher roster.

The records mirror the camelCase proposal payloads the front-end renders and
the OpenAlex author shape, and are validated into :mod:`schemas` models each
time they are handed out so callers never share mutable state.
"""

from __future__ import annotations

import copy
from typing import Dict, List, Optional

from schemas import Proposal, Researcher


class DemoData:
    """Read-only fixtures for the proposal board and matching."""

    def __init__(self, proposals: Optional[List[Dict]] = None, roster: Optional[List[Dict]] = None) -> None:
        self._proposals: List[Dict] = copy.deepcopy(proposals if proposals is not None else PROPOSALS)
        self._roster: List[Dict] = copy.deepcopy(roster if roster is not None else ROSTER)
        # Validate once up front so a broken fixture fails at import.
        self._proposal_models: List[Proposal] = [Proposal.model_validate(item) for item in self._proposals]
        self._proposal_lookup: Dict[str, Proposal] = {item.id: item for item in self._proposal_models}
        for item in self._roster:
            Researcher.model_validate(item)

    def proposals(self) -> List[Proposal]:
        return list(self._proposal_models)

    def proposal(self, proposal_id: str) -> Optional[Proposal]:
        return self._proposal_lookup.get(proposal_id)

    def roster(self) -> List[Researcher]:
        return [Researcher.model_validate(copy.deepcopy(item)) for item in self._roster]


PROPOSALS: List[Dict] = [
    {
        "id": "prop-001",
        "title": "AI-Powered Drug Discovery Platform",
        "company": {"name": "BioTech Innovations Inc.", "industry": "Biotechnology"},
        "description": (
            "We are seeking research partners to develop machine learning algorithms for predicting "
            "drug-target interactions. This project aims to accelerate the drug discovery process by "
            "leveraging advanced AI models and computational chemistry."
        ),
        "researchArea": ["Machine Learning", "Computational Chemistry", "Bioinformatics"],
        "budget": {"min": 250000, "max": 500000, "currency": "USD"},
        "duration": "18-24 months",
        "requirements": [
            "PhD in Computer Science, Computational Biology, or related field",
            "Experience with deep learning frameworks (TensorFlow, PyTorch)",
            "Published research in drug discovery or cheminformatics",
            "Access to computational resources (GPU clusters)"
        ],
        "benefits": [
            "Co-authorship on resulting publications",
            "Access to proprietary drug database",
            "Potential for patent collaboration",
            "Industry partnership opportunities"
        ],
        "deadline": "2025-12-15",
        "postedDate": "2025-10-15",
        "status": "open",
        "matchingCriteria": {
            "minHIndex": 15,
            "minCitations": 1000,
            "requiredExpertise": ["Machine Learning", "Drug Discovery", "Bioinformatics"],
            "preferredInstitutions": ["MIT", "Stanford", "Harvard"]
        },
        "contactEmail": "partnerships@biotechinnovations.com"
    },
    {
        "id": "prop-002",
        "title": "Quantum Computing for Financial Modeling",
        "company": {"name": "QuantumFinance Corp", "industry": "Financial Technology"},
        "description": (
            "Looking for quantum computing experts to develop novel algorithms for portfolio "
            "optimization and risk assessment. This cutting-edge project will explore quantum "
            "advantage in financial applications."
        ),
        "researchArea": ["Quantum Computing", "Finance", "Optimization Algorithms"],
        "budget": {"min": 300000, "max": 600000, "currency": "USD"},
        "duration": "12-18 months",
        "requirements": [
            "Expertise in quantum algorithms and quantum information theory",
            "Background in financial mathematics or econometrics",
            "Experience with Qiskit, Cirq, or similar quantum frameworks",
            "Strong publication record in quantum computing"
        ],
        "benefits": [
            "Access to quantum computing hardware (IBM Q, IonQ)",
            "Joint intellectual property rights",
            "Conference presentation opportunities",
            "Potential for long-term research collaboration"
        ],
        "deadline": "2025-11-30",
        "postedDate": "2025-10-20",
        "status": "open",
        "matchingCriteria": {
            "minHIndex": 20,
            "minCitations": 2000,
            "requiredExpertise": ["Quantum Computing", "Applied Mathematics", "Finance"]
        },
        "contactEmail": "research@quantumfinance.com"
    },
    {
        "id": "prop-003",
        "title": "Sustainable Materials for Next-Gen Batteries",
        "company": {"name": "GreenEnergy Solutions", "industry": "Clean Energy"},
        "description": (
            "Research collaboration to develop environmentally-friendly battery materials with "
            "improved energy density and charging speeds. Focus on reducing reliance on rare earth "
            "elements while maintaining performance."
        ),
        "researchArea": ["Materials Science", "Electrochemistry", "Sustainability"],
        "budget": {"min": 400000, "max": 750000, "currency": "USD"},
        "duration": "24-36 months",
        "requirements": [
            "PhD in Materials Science, Chemistry, or related field",
            "Experience with battery technology and electrochemical systems",
            "Lab facilities for materials synthesis and testing",
            "Track record of industrial collaboration"
        ],
        "benefits": [
            "Pilot manufacturing opportunities",
            "Patent licensing agreements",
            "Access to advanced characterization equipment",
            "Potential startup funding for commercialization"
        ],
        "deadline": "2026-01-31",
        "postedDate": "2025-10-25",
        "status": "open",
        "matchingCriteria": {
            "minHIndex": 18,
            "minCitations": 1500,
            "requiredExpertise": ["Materials Science", "Electrochemistry", "Energy Storage"]
        },
        "contactEmail": "collaborate@greenenergysolutions.com"
    },
    {
        "id": "prop-004",
        "title": "Edge AI for Smart Manufacturing",
        "company": {"name": "IndustrialAI Systems", "industry": "Industrial IoT"},
        "description": (
            "Develop lightweight AI models optimized for edge devices in manufacturing environments. "
            "Focus on real-time quality control, predictive maintenance, and process optimization "
            "with minimal latency."
        ),
        "researchArea": ["Artificial Intelligence", "Edge Computing", "Manufacturing"],
        "budget": {"min": 200000, "max": 400000, "currency": "USD"},
        "duration": "12-15 months",
        "requirements": [
            "Experience with model compression and optimization techniques",
            "Knowledge of industrial control systems",
            "Proficiency in embedded systems programming",
            "Understanding of manufacturing processes"
        ],
        "benefits": [
            "Real-world deployment opportunities",
            "Industry dataset access",
            "Joint publications in top-tier venues",
            "Consulting opportunities post-project"
        ],
        "deadline": "2025-12-20",
        "postedDate": "2025-11-01",
        "status": "open",
        "matchingCriteria": {
            "minHIndex": 12,
            "minCitations": 800,
            "requiredExpertise": ["Edge Computing", "Deep Learning", "IoT"]
        },
        "contactEmail": "research@industrialai.com"
    },
    {
        "id": "prop-005",
        "title": "Neuromorphic Computing for Robotics",
        "company": {"name": "RoboVision Tech", "industry": "Robotics"},
        "description": (
            "Exploring neuromorphic computing architectures for autonomous robotics applications. "
            "Seeking experts in brain-inspired computing to develop energy-efficient perception and "
            "control systems."
        ),
        "researchArea": ["Neuromorphic Computing", "Robotics", "Computer Vision"],
        "budget": {"min": 350000, "max": 650000, "currency": "USD"},
        "duration": "24 months",
        "requirements": [
            "Expertise in spiking neural networks",
            "Experience with robotics platforms (ROS, etc.)",
            "Background in computer vision or control systems",
            "Access to robotics testing facilities"
        ],
        "benefits": [
            "Hardware prototypes for research",
            "Open-source contribution opportunities",
            "Industry mentorship program",
            "Sponsored conference attendance"
        ],
        "deadline": "2026-02-15",
        "postedDate": "2025-11-05",
        "status": "open",
        "matchingCriteria": {
            "minHIndex": 16,
            "minCitations": 1200,
            "requiredExpertise": ["Neuromorphic Computing", "Robotics", "Neural Networks"]
        },
        "contactEmail": "partnerships@robovision.com"
    },
    {
        "id": "prop-006",
        "title": "Privacy-Preserving Healthcare Analytics",
        "company": {"name": "HealthData Security Inc.", "industry": "Healthcare Technology"},
        "description": (
            "Develop advanced cryptographic techniques for secure analysis of sensitive medical data. "
            "Focus on federated learning, homomorphic encryption, and differential privacy for "
            "clinical applications."
        ),
        "researchArea": ["Cryptography", "Healthcare Informatics", "Privacy"],
        "budget": {"min": 280000, "max": 550000, "currency": "USD"},
        "duration": "18 months",
        "requirements": [
            "Strong background in cryptography and security",
            "Experience with healthcare data standards (HIPAA, HL7)",
            "Knowledge of federated learning or secure multi-party computation",
            "Ethics board approval capabilities"
        ],
        "benefits": [
            "Access to de-identified clinical datasets",
            "HIPAA-compliant research infrastructure",
            "Collaboration with medical professionals",
            "Priority for follow-on funding"
        ],
        "deadline": "2025-12-10",
        "postedDate": "2025-10-28",
        "status": "in-review",
        "matchingCriteria": {
            "minHIndex": 14,
            "minCitations": 1000,
            "requiredExpertise": ["Cryptography", "Machine Learning", "Healthcare"]
        },
        "contactEmail": "research@healthdatasecurity.com"
    },
    {
        "id": "prop-007",
        "title": "Climate Change Impact Modeling",
        "company": {"name": "EarthAnalytics Foundation", "industry": "Environmental Science"},
        "description": (
            "Large-scale project to develop high-resolution climate models for regional impact "
            "assessment. Integrating satellite data, ocean dynamics, and atmospheric science for "
            "actionable climate projections."
        ),
        "researchArea": ["Climate Science", "Data Science", "Earth Systems"],
        "budget": {"min": 500000, "max": 1000000, "currency": "USD"},
        "duration": "36 months",
        "requirements": [
            "PhD in Climate Science, Atmospheric Science, or related field",
            "Experience with climate modeling (CESM, WRF, etc.)",
            "High-performance computing expertise",
            "Strong publication record in climate research"
        ],
        "benefits": [
            "Collaboration with international research networks",
            "Access to supercomputing facilities",
            "Policy impact opportunities",
            "Long-term funding potential"
        ],
        "deadline": "2026-03-01",
        "postedDate": "2025-10-18",
        "status": "open",
        "matchingCriteria": {
            "minHIndex": 25,
            "minCitations": 3000,
            "requiredExpertise": ["Climate Modeling", "Earth Science", "Computational Science"]
        },
        "contactEmail": "collaborate@earthanalytics.org"
    },
    {
        "id": "prop-008",
        "title": "Blockchain for Supply Chain Transparency",
        "company": {"name": "SupplyChain Innovations", "industry": "Logistics Technology"},
        "description": (
            "Research partnership to develop blockchain-based solutions for end-to-end supply chain "
            "visibility. Focus on scalability, interoperability, and integration with existing ERP "
            "systems."
        ),
        "researchArea": ["Blockchain", "Supply Chain", "Distributed Systems"],
        "budget": {"min": 180000, "max": 350000, "currency": "USD"},
        "duration": "15 months",
        "requirements": [
            "Expertise in blockchain technologies (Ethereum, Hyperledger)",
            "Understanding of supply chain management",
            "Experience with distributed systems",
            "Industry case study development skills"
        ],
        "benefits": [
            "Pilot deployment with major retailers",
            "Industry conference presentations",
            "Potential for technology licensing",
            "Networking with supply chain executives"
        ],
        "deadline": "2025-11-25",
        "postedDate": "2025-11-02",
        "status": "open",
        "matchingCriteria": {
            "minHIndex": 10,
            "minCitations": 600,
            "requiredExpertise": ["Blockchain", "Supply Chain", "Systems Engineering"]
        },
        "contactEmail": "research@supplychaininnovations.com"
    }
]

ROSTER: List[Dict] = [
    {
        "id": "https://openalex.org/A5023888976",
        "display_name": "Dr. Sarah Chen",
        "orcid": "https://orcid.org/0000-0002-1234-5678",
        "works_count": 127,
        "cited_by_count": 4523,
        "summary_stats": {"h_index": 32, "i10_index": 85, "2yr_mean_citedness": 12.4},
        "last_known_institutions": [
            {
                "id": "https://openalex.org/I138006243",
                "ror": "https://ror.org/02y3ad647",
                "display_name": "University of Florida",
                "country_code": "US",
                "type": "education"
            }
        ],
        "x_concepts": [
            {"id": "C41008148", "display_name": "Machine Learning", "level": 1, "score": 95.2},
            {"id": "C86803240", "display_name": "Bioinformatics", "level": 1, "score": 88.6},
            {"id": "C142362112", "display_name": "Drug Discovery", "level": 2, "score": 82.3},
            {"id": "C154945302", "display_name": "Computational Chemistry", "level": 2, "score": 76.8}
        ],
        "works_api_url": "https://api.openalex.org/works?filter=author.id:A5023888976",
        "updated_date": "2025-11-08"
    },
    {
        "id": "https://openalex.org/A5089543210",
        "display_name": "Dr. Michael Rodriguez",
        "orcid": "https://orcid.org/0000-0003-9876-5432",
        "works_count": 98,
        "cited_by_count": 3187,
        "summary_stats": {"h_index": 28, "i10_index": 67, "2yr_mean_citedness": 10.8},
        "last_known_institutions": [
            {
                "id": "https://openalex.org/I28342112",
                "ror": "https://ror.org/02j9xsb90",
                "display_name": "University of Central Florida",
                "country_code": "US",
                "type": "education"
            }
        ],
        "x_concepts": [
            {"id": "C41008148", "display_name": "Machine Learning", "level": 1, "score": 91.5},
            {"id": "C142362112", "display_name": "Drug Discovery", "level": 2, "score": 85.2},
            {"id": "C86803240", "display_name": "Bioinformatics", "level": 1, "score": 79.4},
            {"id": "C17744445", "display_name": "Deep Learning", "level": 2, "score": 88.9}
        ],
        "works_api_url": "https://api.openalex.org/works?filter=author.id:A5089543210",
        "updated_date": "2025-11-07"
    }
]


DEMO_DATA = DemoData()
