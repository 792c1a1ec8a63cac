"""Human-readable identifier issuance.

Health identifiers are date-partitioned (``HLTH-20260118-48213``) and card
numbers carry a 15-digit random suffix (``ABY-482135559012873``). Neither is
unique by construction: callers go through :func:`issue_unique`, which checks
each candidate against the store and retries on collision, including
collisions the database reports when two requests race for the same value.
"""

from __future__ import annotations

import logging
import random
import re
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TypeVar

from health_registry.config import settings
from health_registry.errors import ConflictError, GenerationExhausted

logger = logging.getLogger(__name__)

T = TypeVar("T")

PERSON_ID_PATTERN = re.compile(r"^[A-Z]+-\d{8}-\d{5}$")
CARD_NUMBER_PATTERN = re.compile(r"^[A-Z]+-\d{15}$")


class IdentifierGenerator:
    """Issues candidate identifiers. Holds no state beyond its sources.

    Args:
        rng: Randomness source. Defaults to the OS entropy pool.
        clock: Returns the current local time; its date partitions person ids.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
        person_prefix: str | None = None,
        card_prefix: str | None = None,
    ):
        self._rng = rng or random.SystemRandom()
        self._clock = clock
        self.person_prefix = person_prefix or settings.health_id_prefix
        self.card_prefix = card_prefix or settings.card_number_prefix

    def issue_person_id(self) -> str:
        suffix = self._rng.randint(10_000, 99_999)
        return f"{self.person_prefix}-{self._clock():%Y%m%d}-{suffix}"

    def issue_card_number(self) -> str:
        suffix = self._rng.randint(10**14, 10**15 - 1)
        return f"{self.card_prefix}-{suffix}"


async def issue_unique(
    issue: Callable[[], str],
    is_taken: Callable[[str], Awaitable[bool]],
    *,
    kind: str,
    max_attempts: int | None = None,
    claim: Callable[[str], Awaitable[T]] | None = None,
) -> tuple[str, T | None]:
    """Issue an identifier nobody holds yet, optionally claiming it in storage.

    Each attempt draws a fresh candidate and skips it if ``is_taken`` reports a
    holder. When ``claim`` is given it performs the write that takes the
    identifier; a ``ConflictError`` from it means another writer got there
    first, and the loop moves on to a new candidate.

    Args:
        issue: Produces a candidate identifier.
        is_taken: Async uniqueness check against the store.
        kind: Human-readable identifier kind, for logs and errors.
        max_attempts: Upper bound on candidates tried.
        claim: Async write that persists the candidate.

    Returns:
        The identifier and the result of ``claim`` (None without a claim).

    Raises:
        GenerationExhausted: Every attempt collided.
    """
    attempts = max_attempts or settings.identifier_max_attempts
    for attempt in range(1, attempts + 1):
        candidate = issue()
        if await is_taken(candidate):
            logger.warning(
                "Generated %s %s already in use (attempt %d/%d)", kind, candidate, attempt, attempts
            )
            continue
        if claim is None:
            return candidate, None
        try:
            return candidate, await claim(candidate)
        except ConflictError as exc:
            logger.warning(
                "Storage rejected %s %s (attempt %d/%d): %s", kind, candidate, attempt, attempts, exc.message
            )

    logger.error("Exhausted %d attempts generating a unique %s", attempts, kind)
    raise GenerationExhausted(kind, attempts)
