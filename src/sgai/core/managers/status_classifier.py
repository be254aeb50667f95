"""Completion classification for job status tokens.

The server's status vocabulary is open-ended; only the tokens listed here are
terminal. Both the submit-response check and the poll loop go through
`StatusClassifier.classify`, so new tokens are added in one place.
"""

from typing import AbstractSet, Iterable, Optional

from sgai.core.models.job import Completion

SUCCESS_STATUSES = frozenset({"completed", "done", "success"})
FAILURE_STATUSES = frozenset({"failed"})


class StatusClassifier:
    """Maps a job status string to success, failure or pending."""

    def __init__(
        self,
        success: Iterable[str] = SUCCESS_STATUSES,
        failure: Iterable[str] = FAILURE_STATUSES,
    ) -> None:
        self.success: AbstractSet[str] = frozenset(success)
        self.failure: AbstractSet[str] = frozenset(failure)
        overlap = self.success & self.failure
        if overlap:
            raise ValueError(f"Status tokens cannot be both success and failure: {sorted(overlap)}")

    def classify(self, status: Optional[str]) -> Completion:
        # anything that is not a string token (absent, null, objects) is pending
        if not isinstance(status, str):
            return Completion.pending
        if status in self.success:
            return Completion.success
        if status in self.failure:
            return Completion.failure
        return Completion.pending

    def is_done(self, status: Optional[str]) -> bool:
        return self.classify(status) is Completion.success

    def extended(
        self,
        success: Iterable[str] = (),
        failure: Iterable[str] = (),
    ) -> "StatusClassifier":
        """Return a new classifier that also recognizes the given tokens."""
        return StatusClassifier(
            success=self.success | frozenset(success),
            failure=self.failure | frozenset(failure),
        )


DEFAULT_CLASSIFIER = StatusClassifier()


def classify(status: Optional[str]) -> Completion:
    return DEFAULT_CLASSIFIER.classify(status)
