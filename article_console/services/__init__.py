"""Services for the Article Console."""
from article_console.services.request_lifecycle import (
    CancellationToken,
    RetryPolicy,
    fixed_delay,
    fetch_with_retry,
    ListingState,
    RequestTicket,
    ListingController,
    get_listing_controller,
)
from article_console.services.api_client import (
    ConsoleAPIClient,
    PageResult,
    normalize_error,
    get_api_client,
)
from article_console.services.access import (
    GateDecision,
    check_role,
    enforce_role,
    is_admin_path,
    resolve_route_gate,
)
from article_console.services import auth_service

__all__ = [
    # Request lifecycle
    "CancellationToken",
    "RetryPolicy",
    "fixed_delay",
    "fetch_with_retry",
    "ListingState",
    "RequestTicket",
    "ListingController",
    "get_listing_controller",
    # Backend client
    "ConsoleAPIClient",
    "PageResult",
    "normalize_error",
    "get_api_client",
    # Access gates
    "GateDecision",
    "check_role",
    "enforce_role",
    "is_admin_path",
    "resolve_route_gate",
    # Auth flows
    "auth_service",
]
