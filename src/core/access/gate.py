# src/core/access/gate.py
"""Allow-list access control for the private messaging surface.

The gate holds the set of user/chat IDs allowed to talk to the bot. It is
built once at startup from a comma-separated string and never changes
afterwards. An empty set denies everyone.
"""

import logging
import re

logger = logging.getLogger(__name__)

_ID_TOKEN = re.compile(r"[+-]?[0-9]+")


def parse_authorized_ids(raw: str | None) -> frozenset[int]:
    """Parse a comma-separated list of integer identities.

    Tokens are trimmed and must be an optional sign followed by ASCII
    digits; "1_000", "1.5" or non-ASCII digits are discarded, as are zeros.
    Duplicates collapse.

    Args:
        raw: Configuration string, e.g. "123, 0, abc,456".

    Returns:
        Set of authorized identities, e.g. frozenset({123, 456}).
    """
    if not raw:
        return frozenset()

    ids: set[int] = set()
    for token in raw.split(","):
        token = token.strip()
        if not _ID_TOKEN.fullmatch(token):
            continue
        identity = int(token)
        if identity != 0:
            ids.add(identity)
    return frozenset(ids)


class AccessGate:
    """Allow-list check for inbound updates and outbound sends.

    Inbound denials are logged as warnings (someone tried to talk to the
    bot). Outbound denials are logged as errors (our own code tried to
    message someone it should not).
    """

    def __init__(self, authorized_ids: frozenset[int] | set[int]) -> None:
        self._authorized_ids = frozenset(authorized_ids)
        if not self._authorized_ids:
            logger.warning(
                "NO AUTHORIZED USERS CONFIGURED. The bot will ignore all interactions."
            )

    @classmethod
    def from_config(cls, raw: str | None) -> "AccessGate":
        return cls(parse_authorized_ids(raw))

    @property
    def authorized_ids(self) -> frozenset[int]:
        return self._authorized_ids

    def is_authorized(self, identity: int | None) -> bool:
        """Check whether an identity is on the allow-list."""
        if identity is None:
            return False
        return identity in self._authorized_ids

    def check_inbound(self, sender: int | None, chat: int | None = None) -> bool:
        """Gate an inbound update by its sender.

        Args:
            sender: Sender identity, None when the update has no user.
            chat: Chat identity, only used for logging.

        Returns:
            True if processing may continue.
        """
        if self.is_authorized(sender):
            return True
        logger.warning(
            "Unauthorized access attempt from UserID: %s (ChatID: %s)", sender, chat
        )
        return False

    def check_outbound(self, target: int | None) -> bool:
        """Gate an outbound send by its target chat."""
        if self.is_authorized(target):
            return True
        logger.error("Blocked outgoing message to unauthorized ChatID: %s", target)
        return False
