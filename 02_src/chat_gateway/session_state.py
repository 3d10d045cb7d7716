"""
Session state shared by every call of one SDK instance.

Threads the server-issued session affinity id and the rotating auth nonce
from responses into subsequent requests.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from . import headers as http_headers

logger = logging.getLogger(__name__)


def generate_nonce() -> str:
    """Locally generated seed nonce: first 8 characters of a random UUID."""
    return str(uuid.uuid4())[:8]


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of session state at one point in time."""

    auth_nonce: str
    session_affinity_id: Optional[str] = None
    revision: int = 0

    def to_headers(self, include_nonce: bool) -> Dict[str, str]:
        """
        Render the snapshot as request headers.

        Args:
            include_nonce: Attach the auth nonce (authenticated calls only)

        Returns:
            Dict of header name to value
        """
        result: Dict[str, str] = {}
        if self.session_affinity_id:
            result[http_headers.OC_SESSION_ID] = self.session_affinity_id
        if include_nonce:
            result[http_headers.AUTH_CODE_NONCE] = self.auth_nonce
        return result


class SessionStateStore:
    """
    Process-local store for session affinity id and auth nonce.

    Commits never await, so under asyncio scheduling each commit is atomic
    with respect to other tasks. Ordering is last-writer-wins; every
    effective commit bumps the revision counter.
    """

    def __init__(self, auth_nonce: Optional[str] = None):
        self._auth_nonce = auth_nonce or generate_nonce()
        self._session_affinity_id: Optional[str] = None
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    def read_snapshot(self) -> SessionSnapshot:
        """Return the most recently committed values."""
        return SessionSnapshot(
            auth_nonce=self._auth_nonce,
            session_affinity_id=self._session_affinity_id,
            revision=self._revision,
        )

    def commit(
        self,
        session_affinity_id: Optional[str] = None,
        auth_nonce: Optional[str] = None,
    ) -> SessionSnapshot:
        """
        Merge fresh values into the store.

        Absent or empty fields leave the current value untouched.

        Args:
            session_affinity_id: Affinity id issued by the server
            auth_nonce: Rotated nonce issued by the server

        Returns:
            Snapshot after the commit
        """
        changed = False
        if session_affinity_id:
            self._session_affinity_id = session_affinity_id
            changed = True
        if auth_nonce:
            self._auth_nonce = auth_nonce
            changed = True

        if changed:
            self._revision += 1
            logger.debug("Session state committed, revision %d", self._revision)

        return self.read_snapshot()

    def commit_from_headers(self, headers: Mapping[str, str]) -> SessionSnapshot:
        """
        Commit nonce and affinity id found in response headers.

        Header lookup is case-insensitive; both headers are optional.

        Args:
            headers: Response headers

        Returns:
            Snapshot after the commit
        """
        lowered = {str(k).lower(): v for k, v in headers.items()}
        return self.commit(
            session_affinity_id=lowered.get(http_headers.OC_SESSION_ID.lower()),
            auth_nonce=lowered.get(http_headers.AUTH_CODE_NONCE.lower()),
        )
