"""Inbound adapters for the indexed table.

Inbound adapters handle incoming requests and convert them to
table operations.

Exports:
    REST API:
        - create_app: Create a FastAPI application over a TableEngine
        - run_server: Run the REST API server with uvicorn
"""

from indexed_table.adapters.inbound.rest_api import create_app, run_server

__all__ = [
    "create_app",
    "run_server",
]
