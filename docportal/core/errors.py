"""
Domain exceptions raised by the service layer.

Routers translate these into HTTPException responses.
"""


class AuthenticationError(Exception):
    """Login attempt rejected. The message never says which field was wrong."""

    def __init__(self, message: str = "Incorrect username or password"):
        super().__init__(message)
        self.message = message


class AnalysisError(Exception):
    """The document analyzer could not produce a usable result."""
