"""
authgate.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation (request id, fingerprint) for log enrichment.
"""

# Package marker.
