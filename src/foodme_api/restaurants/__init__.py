"""
foodme_api.restaurants

Restaurant and menu lookup collaborators (flat-file backed, in memory).
"""

# Package marker.
