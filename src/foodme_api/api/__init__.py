"""
foodme_api.api

HTTP API package (FastAPI app factory, dependencies, routers).
"""

# Package marker.
