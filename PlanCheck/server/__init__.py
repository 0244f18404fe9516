"""Server — JSON-over-HTTP front end for the dependency analyzer.

Usage:
    python -m PlanCheck.server --port 5000

    curl -X POST localhost:5000/api/validate -d '{"tasks": [...]}'
"""

from .server import APIHandler, make_server, run_server

__all__ = [
    "APIHandler",
    "make_server",
    "run_server",
]
