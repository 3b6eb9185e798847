"""Company name checks run while an account is being entered.

check_company_name runs the whole check for one value: normalization, the
blocking rules, the candidate search and the fuzzy match. DebouncedChecker
drives it from a stream of edits so only the latest value's result is
reported.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from ..utils.matching import DuplicateVerdict, find_duplicates
from ..utils.normalization import normalize_company_name
from ..utils.validation import validate_company_name
from .directory import OwnerDirectory
from .search import DuplicateSearchError

logger = logging.getLogger(__name__)

SEARCH_FAILED = "Failed to validate company name"

MODES = ('create', 'edit')


@dataclass
class CheckResult:
    """Result of checking one company name value."""
    company_name: str
    normalized_name: str = ''
    error: str = ''
    verdict: DuplicateVerdict = field(default_factory=DuplicateVerdict)
    searched: bool = False

    @property
    def blocks_submission(self) -> bool:
        return bool(self.error)

    def to_dict(self) -> Dict:
        """Convert result to dictionary format."""
        return {
            'company_name': self.company_name,
            'normalized_name': self.normalized_name,
            'error': self.error,
            'searched': self.searched,
            'verdict': self.verdict.to_dict()
        }


def check_company_name(
    raw: str,
    search,
    current_owner_id: str,
    directory: Optional[OwnerDirectory] = None,
    mode: str = 'create'
) -> CheckResult:
    """Check a company name for blocking rule failures and duplicates.

    Args:
        raw: Company name as typed by the user
        search: Candidate search with a search(normalized_name) method
        current_owner_id: Reference id of the user entering the account
        directory: Optional owner directory used to name other owners
        mode: 'create' runs every check, 'edit' skips them

    Returns:
        CheckResult; a non-empty error blocks submission
    """
    if mode not in MODES:
        raise ValueError(f"mode must be one of: {', '.join(MODES)}")

    raw = raw or ''
    if mode == 'edit':
        return CheckResult(company_name=raw)

    normalized = normalize_company_name(raw)
    error = validate_company_name(normalized)
    if error:
        return CheckResult(company_name=raw, normalized_name=normalized, error=error)

    try:
        result = search.search(normalized)
    except DuplicateSearchError as e:
        logger.warning(f"Duplicate check failed for {normalized!r}: {str(e)}")
        return CheckResult(
            company_name=raw,
            normalized_name=normalized,
            error=SEARCH_FAILED,
            searched=True
        )

    if not (result.exists and result.companies):
        return CheckResult(company_name=raw, normalized_name=normalized, searched=True)

    owner_names = directory.names() if directory else None
    verdict = find_duplicates(normalized, result.companies, current_owner_id, owner_names)
    return CheckResult(
        company_name=raw,
        normalized_name=normalized,
        error=verdict.message,
        verdict=verdict,
        searched=True
    )


class DebouncedChecker:
    """Runs checks after input settles, reporting only the latest value.

    Every submit() restarts the delay window. Each submitted value gets a
    sequence number and a result is delivered only if its sequence number
    is still the latest when the check finishes; anything older is
    dropped without notice.

    flush() and cancel() return only once no check is running, so the
    caller may close whatever the checks use afterwards.
    """

    def __init__(
        self,
        check: Callable[[str], CheckResult],
        on_result: Callable[[CheckResult], None],
        delay: float = 0.5
    ):
        """Initialize the checker.

        Args:
            check: Function running the full check for a raw value
            on_result: Called with the result of the latest value
            delay: Seconds to wait after the last submit before checking
        """
        self.check = check
        self.on_result = on_result
        self.delay = delay
        self.last_result: Optional[CheckResult] = None
        self._lock = threading.RLock()
        self._sequence = 0
        self._delivered = 0
        self._timers: List[threading.Timer] = []
        self._pending: Optional[Tuple[int, str]] = None

    def submit(self, raw: str) -> int:
        """Register a new value, superseding any earlier one.

        Returns:
            The sequence number assigned to this value
        """
        with self._lock:
            self._sequence += 1
            sequence = self._sequence
            for timer in self._timers:
                timer.cancel()
            self._timers = [timer for timer in self._timers if timer.is_alive()]
            self._pending = (sequence, raw)
            timer = threading.Timer(self.delay, self._run, args=(sequence,))
            timer.daemon = True
            self._timers.append(timer)
            timer.start()
        logger.debug(f"Scheduled check #{sequence} for {raw!r} in {self.delay:.3f}s")
        return sequence

    def flush(self) -> Optional[CheckResult]:
        """Run the pending check now, or wait for the one already running.

        Returns:
            The result for the latest value, or None if nothing was
            submitted since the last flush or the value was cancelled
        """
        with self._lock:
            pending, self._pending = self._pending, None
            timers, self._timers = self._timers, []
            for timer in timers:
                timer.cancel()

        result = self._execute(*pending) if pending else None
        self._join(timers)

        if pending is None and timers:
            with self._lock:
                if self._delivered == self._sequence:
                    result = self.last_result
        return result

    def cancel(self) -> None:
        """Drop the pending check and any result still in flight."""
        with self._lock:
            self._sequence += 1
            self._pending = None
            timers, self._timers = self._timers, []
            for timer in timers:
                timer.cancel()
        self._join(timers)

    def _join(self, timers: List[threading.Timer]) -> None:
        current = threading.current_thread()
        for timer in timers:
            if timer is not current:
                timer.join()

    def _run(self, sequence: int) -> None:
        with self._lock:
            if self._pending is None or self._pending[0] != sequence:
                return
            _, raw = self._pending
            self._pending = None
        self._execute(sequence, raw)

    def _execute(self, sequence: int, raw: str) -> Optional[CheckResult]:
        result = self.check(raw)

        with self._lock:
            if sequence != self._sequence:
                logger.debug(f"Discarding stale result of check #{sequence}")
                return None
            self._delivered = sequence
            self.last_result = result
            self.on_result(result)
        return result
