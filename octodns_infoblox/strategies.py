#
#
#

"""Per-record failure strategies.

Append, set and delete work through their records one at a time. When a
single record fails the strategy decides whether the whole call stops or
carries on with the rest.
"""

from typing import List, Protocol

from .exceptions import InfobloxRecordError


class FailureStrategy(Protocol):
    """Protocol for handling a failed record.

    - abort: raise, handing back what was completed so far
    - continue: log, drop the record, keep going
    """

    def record_failed(
        self, log, error: InfobloxRecordError, completed: List
    ) -> None:
        """Handle a failure.

        Args:
            log: Logger of the calling operation
            error: The failure, with the record and underlying cause
            completed: Results accumulated before this record
        """
        ...


class AbortStrategy:
    """Stop at the first failure."""

    def record_failed(
        self, log, error: InfobloxRecordError, completed: List
    ) -> None:
        log.error('%s; aborting after %d records', error, len(completed))
        error.records = list(completed)
        raise error


class ContinueStrategy:
    """Skip the failed record and process the remaining ones."""

    def record_failed(
        self, log, error: InfobloxRecordError, completed: List
    ) -> None:
        log.error('%s; skipping', error)


STRATEGIES = {
    'abort': AbortStrategy,
    'continue': ContinueStrategy,
    'skip': ContinueStrategy,
}
