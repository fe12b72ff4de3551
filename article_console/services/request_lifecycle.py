"""
Request lifecycle helpers for listing views.

Two independent behaviors, both optional per call site:

- Cancellation-on-supersede: each listing view owns a ListingController.
  Issuing a new query cancels the previous one, and only the newest
  ticket's outcome is ever applied to view state.
- Bounded retry with a fixed delay: fetch_with_retry / RetryPolicy.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, TypeVar

import requests

from article_console.config.settings import config
from article_console.utils.exceptions import ConsoleError, RequestCancelledError, is_cancelled
from article_console.utils.session_state import SessionState

logger = logging.getLogger(__name__)

T = TypeVar('T')


class CancellationToken:
    """Cooperative cancellation signal handed to the API client.

    Cancelling does not interrupt a request already on the wire; the client
    checks the token when the response arrives and drops it.
    """

    def __init__(self):
        self._event = threading.Event()
        self.reason: Optional[str] = None

    def cancel(self, reason: str = "superseded") -> None:
        """Signal cancellation. Idempotent."""
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise RequestCancelledError if cancel() was called."""
        if self._event.is_set():
            raise RequestCancelledError(f"Request cancelled ({self.reason})")


# ==============================================================================
# Bounded retry
# ==============================================================================

def fixed_delay(seconds: float) -> Callable[[int], float]:
    """Delay function that waits the same time before every retry."""
    return lambda attempt: seconds


@dataclass(frozen=True)
class RetryPolicy:
    """Retry an operation a bounded number of times.

    Every exception counts as a failure and consumes one retry; there is no
    jitter and no growth unless delay_fn provides it. A cancellation is not
    a failure and is re-raised at once.

    Attributes:
        max_retries: Retries after the first attempt (0 = single attempt)
        delay_fn: Maps the retry number (1-based) to seconds to wait
        sleep: Sleep function; None means time.sleep
    """
    max_retries: int = 3
    delay_fn: Callable[[int], float] = field(default=fixed_delay(1.0))
    sleep: Optional[Callable[[float], None]] = None

    def run(self, operation: Callable[[], T]) -> T:
        """Call operation until it succeeds or the budget is spent.

        Returns:
            The first successful result

        Raises:
            The exception of the final attempt
        """
        sleep = self.sleep or time.sleep
        retries_left = max(self.max_retries, 0)
        retry_number = 0

        while True:
            try:
                return operation()
            except Exception as e:
                if is_cancelled(e) or retries_left <= 0:
                    raise
                retry_number += 1
                retries_left -= 1
                wait = self.delay_fn(retry_number)
                logger.warning(
                    f"Attempt {retry_number} failed ({e}); retrying in {wait}s "
                    f"({retries_left} retries left)"
                )
                sleep(wait)


def fetch_with_retry(
    operation: Callable[[], T],
    retries: int = None,
    delay: float = None,
    sleep: Optional[Callable[[float], None]] = None
) -> T:
    """Call operation, retrying on any failure after a fixed delay.

    Args:
        operation: Zero-argument callable doing the request
        retries: Retry budget (default from config, 3)
        delay: Seconds between attempts (default from config, 1.0)
        sleep: Sleep function override

    Returns:
        The first successful result; operation is called at most retries + 1 times
    """
    if retries is None:
        retries = config.MAX_RETRY_ATTEMPTS
    if delay is None:
        delay = config.RETRY_DELAY_SECONDS
    policy = RetryPolicy(max_retries=retries, delay_fn=fixed_delay(delay), sleep=sleep)
    return policy.run(operation)


# ==============================================================================
# Cancellation-on-supersede
# ==============================================================================

class ListingState(str, Enum):
    """Lifecycle of a listing view's request."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class RequestTicket:
    """One issued listing request."""
    generation: int
    token: CancellationToken
    query: Any = None
    state: ListingState = ListingState.LOADING


class ListingController:
    """Owns the in-flight listing request of one view.

    At most one ticket is LOADING at a time. Results and errors of a ticket
    that is no longer the newest one are discarded.

    Example:
        >>> controller = ListingController("admin_articles")
        >>> controller.load({"page": 1}, lambda token: ["a", "b"])
        <ListingState.SUCCESS: 'success'>
        >>> controller.result
        ['a', 'b']
    """

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._generation = 0
        self._current: Optional[RequestTicket] = None
        self._stale = False
        self.state = ListingState.IDLE
        self.query: Any = None
        self.result: Any = None
        self.error: Optional[BaseException] = None

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, query: Any = None) -> RequestTicket:
        """Cancel any pending ticket and issue a new one."""
        with self._lock:
            previous = self._current
            if previous is not None and previous.state is ListingState.LOADING:
                previous.token.cancel("superseded")
                previous.state = ListingState.CANCELLED
                logger.debug(f"[{self.name}] cancelled request #{previous.generation}")

            self._generation += 1
            ticket = RequestTicket(
                generation=self._generation,
                token=CancellationToken(),
                query=query,
            )
            self._current = ticket
            self.state = ListingState.LOADING
            self.error = None
            return ticket

    def is_current(self, ticket: RequestTicket) -> bool:
        """True while the ticket is the newest and has not been cancelled."""
        return ticket is self._current and not ticket.token.cancelled

    def complete(self, ticket: RequestTicket, result: Any) -> bool:
        """Apply a result if the ticket is still current.

        Returns:
            True if the result was applied, False if it was discarded
        """
        with self._lock:
            if not self.is_current(ticket):
                logger.debug(f"[{self.name}] discarded result of request #{ticket.generation}")
                return False
            ticket.state = ListingState.SUCCESS
            self.state = ListingState.SUCCESS
            self.query = ticket.query
            self.result = result
            self.error = None
            self._stale = False
            return True

    def fail(self, ticket: RequestTicket, error: BaseException) -> bool:
        """Record a failure if the ticket is still current.

        Cancellations are never recorded as failures.

        Returns:
            True if the error was applied, False if it was discarded
        """
        with self._lock:
            if is_cancelled(error) or not self.is_current(ticket):
                if ticket.state is ListingState.LOADING:
                    ticket.state = ListingState.CANCELLED
                logger.debug(f"[{self.name}] discarded error of request #{ticket.generation}: {error}")
                return False
            ticket.state = ListingState.FAILED
            self.state = ListingState.FAILED
            self.query = ticket.query
            self.error = error
            self._stale = False
            return True

    def run(self, fetch: Callable[[CancellationToken], Any], query: Any = None) -> RequestTicket:
        """Issue a new ticket and run fetch under it.

        fetch receives the ticket's cancellation token and should pass it
        to the API client.
        """
        ticket = self.begin(query)
        try:
            result = fetch(ticket.token)
        except (ConsoleError, requests.exceptions.RequestException) as e:
            if self.fail(ticket, e):
                logger.error(f"[{self.name}] request #{ticket.generation} failed: {e}")
            return ticket
        self.complete(ticket, result)
        return ticket

    def load(
        self,
        query: Any,
        fetch: Callable[[CancellationToken], Any],
        force: bool = False
    ) -> ListingState:
        """Fetch for query unless the last finished request already covers it.

        Streamlit reruns the page on every interaction, so an unchanged query
        reuses the previous outcome until invalidate() is called.
        """
        with self._lock:
            settled = self.state in (ListingState.SUCCESS, ListingState.FAILED)
            reuse = not force and not self._stale and settled and self.query == query
        if not reuse:
            self.run(fetch, query)
        return self.state

    def invalidate(self) -> None:
        """Force the next load() to refetch, e.g. after a delete."""
        with self._lock:
            self._stale = True

    def close(self) -> None:
        """Cancel any pending request when the view goes away."""
        with self._lock:
            if self._current is not None and self._current.state is ListingState.LOADING:
                self._current.token.cancel("closed")
                self._current.state = ListingState.CANCELLED
            self.state = ListingState.IDLE


def get_listing_controller(view: str) -> ListingController:
    """Get the controller owned by a listing view in this browser session."""
    controllers: Dict[str, ListingController] = SessionState.get_or_set('listing_controllers', {})
    controller = controllers.get(view)
    if controller is None:
        controller = ListingController(view)
        controllers[view] = controller
    return controller
