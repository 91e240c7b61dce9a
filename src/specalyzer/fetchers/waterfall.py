"""Ordered-candidate fallback.

Tries candidates strictly in order, stops at the first success and keeps
only the last failure for reporting. Used for the main/master manifest
lookup.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Iterable, Optional, TypeVar

logger = logging.getLogger(__name__)

C = TypeVar("C")
T = TypeVar("T")


@dataclass
class CandidateOutcome(Generic[C, T]):
    """Outcome of an ordered fallback.

    Attributes:
        value: Result of the first successful attempt, if any.
        candidate: Candidate that produced ``value``.
        last_error: Error of the last failed attempt when none succeeded.
        attempts: Number of candidates tried.
    """

    value: Optional[T] = None
    candidate: Optional[C] = None
    last_error: Optional[Exception] = None
    attempts: int = 0

    @property
    def succeeded(self) -> bool:
        """Return True if one candidate succeeded."""
        return self.candidate is not None


async def first_success(
    candidates: Iterable[C],
    attempt: Callable[[C], Awaitable[T]],
    errors: tuple[type[Exception], ...] = (Exception,),
) -> CandidateOutcome[C, T]:
    """Try candidates in order until one attempt succeeds.

    Args:
        candidates: Candidates in preference order.
        attempt: Coroutine function called with each candidate.
        errors: Exception types that mean "try the next candidate". Any
            other exception propagates.

    Returns:
        CandidateOutcome holding the first success, or the last error if
        every candidate failed.
    """
    outcome: CandidateOutcome[C, T] = CandidateOutcome()
    for candidate in candidates:
        outcome.attempts += 1
        try:
            value = await attempt(candidate)
        except errors as e:
            logger.debug("Candidate %s failed: %s", candidate, e)
            outcome.last_error = e
            continue

        outcome.value = value
        outcome.candidate = candidate
        outcome.last_error = None
        return outcome

    return outcome
