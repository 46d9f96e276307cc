"""
foodme_api.api.routers

HTTP routers grouped by resource.
"""

# Package marker.
