"""
authgate.integrations

Framework adapters converting native request/response objects to and from pipelines.
"""

# Package marker.
