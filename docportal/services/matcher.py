"""
Client Matcher Module

Resolves the client name read from a document to a Client record.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from docportal.models.client import Client
from docportal.schemas.analysis import is_sentinel_name
from docportal.services.credential_store import ClientStore

logger = logging.getLogger(__name__)


@dataclass
class MatchOutcome:
    client: Client
    created: bool = False


def names_overlap(candidate: str, extracted: str) -> bool:
    """Bidirectional case-insensitive substring containment."""
    a = candidate.lower()
    b = extracted.lower()
    return b in a or a in b


class ClientMatcher:
    """
    Finds the owning client for an extracted name, creating it when needed.

    Candidates are scanned in store order and the first one whose name
    contains, or is contained in, the extracted name wins. Similar names can
    therefore be attributed to the older client.
    """

    def __init__(self, clients: ClientStore):
        self.clients = clients

    def find(self, extracted_name: str) -> Optional[Client]:
        name = (extracted_name or "").strip()
        if is_sentinel_name(name):
            return None
        for candidate in self.clients.list():
            if names_overlap(candidate.name, name):
                return candidate
        return None

    def resolve(self, extracted_name: str, commit: bool = True) -> Optional[MatchOutcome]:
        """
        Return the matched or newly created client.

        Empty names and the "unknown" / "read error" markers never match and
        never create a client; None is returned for them. A new client takes
        the extracted name exactly as read.
        """
        if is_sentinel_name(extracted_name):
            return None

        client = self.find(extracted_name)
        if client:
            return MatchOutcome(client=client, created=False)

        client = self.clients.create(extracted_name, commit=commit)
        logger.info("New client detected: %s", extracted_name)
        return MatchOutcome(client=client, created=True)
