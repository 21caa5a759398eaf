"""
Registry of available examples.
"""
from typing import List, TypedDict


class ExampleMetadata(TypedDict):
    path: str
    tags: List[str]
    variants: List[str]
    description: str


EXAMPLES: List[ExampleMetadata] = [
    {
        "path": "basic/00_encode_stages.py",
        "tags": ["basic", "p0"],
        "variants": ["rolling", "digest", "cohort"],
        "description": "Bloom, PRR and IRR of a few values, plus an invalid-width encoder."
    },
    {
        "path": "client/10_simulate_clients.py",
        "tags": ["client", "p0"],
        "variants": ["rolling", "digest", "cohort"],
        "description": "Many clients with their own secrets; per-bit count estimation from reports."
    },
]
