"""
authgate.auth

Authenticator validation package.

Responsibilities:
- Authenticator domain model.
- Validators and the composition engine that accumulates their errors.
- JWT codec and FastAPI dependency as reference collaborators.
"""

# Package marker.
