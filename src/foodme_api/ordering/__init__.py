"""
foodme_api.ordering

Order/payment processing core.

Responsibilities:
- Accumulate order line items.
- Apply probability-gated failure checkpoints.
- Record business metrics and correlated span/log output for every outcome.
"""

# Package marker.
