"""
Auth Gate Module

Validates login attempts and establishes the session role. A session is either
the administrator or a client; logging out returns to anonymous, which is
represented by the absence of an AuthSession.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from docportal.core.errors import AuthenticationError
from docportal.core.security import CredentialVerifier, PlaintextCredentialVerifier
from docportal.models.user import UserRole
from docportal.services.credential_store import ClientStore

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "admin"


@dataclass(frozen=True)
class AuthSession:
    role: UserRole
    client_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def subject(self) -> str:
        return ADMIN_SUBJECT if self.is_admin else self.client_id


class AuthGate:
    def __init__(
        self,
        clients: ClientStore,
        admin_username: str,
        admin_password: str,
        verifier: Optional[CredentialVerifier] = None,
    ):
        self.clients = clients
        self.admin_username = admin_username
        self.admin_password = admin_password
        self.verifier = verifier or PlaintextCredentialVerifier()

    def login(self, identifier: str, password: str) -> AuthSession:
        """
        Authenticate an (identifier, password) pair.

        The admin credential is checked first, then clients by case-insensitive
        name. A successful client login stamps last_login.

        Raises:
            AuthenticationError: for any failed attempt, without saying which
                part was wrong
        """
        identifier = identifier or ""
        if (
            identifier.lower() == self.admin_username.lower()
            and self.verifier.verify(password, self.admin_password)
        ):
            logger.info("Admin login")
            return AuthSession(role=UserRole.ADMIN)

        client = self.clients.find_by_name(identifier)
        if client and self.verifier.verify(password, client.password):
            self.clients.record_login(client.id)
            logger.info("Client login: %s", client.id)
            return AuthSession(role=UserRole.CLIENT, client_id=client.id)

        logger.info("Rejected login attempt")
        raise AuthenticationError()
