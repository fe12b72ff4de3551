"""Client-side role and route gates.

These only steer the UI. They are trivially bypassed in the browser; the
backend checks authorization on every request.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from article_console.config.settings import config, ROLE_ADMIN
from article_console.utils.exceptions import AccessDeniedError
from article_console.utils.session_state import SessionCredential, PATH_LOGIN

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/admin"
ACCESS_DENIED_MESSAGE = "Access denied. You do not have admin permission."
UNAUTHORIZED_REDIRECT = f"{PATH_LOGIN}?error=Unauthorized"


@dataclass(frozen=True)
class GateDecision:
    """Whether a view may render, and where to go if not."""
    allowed: bool
    message: Optional[str] = None
    redirect_to: Optional[str] = None
    delay_seconds: float = 0.0


ALLOWED = GateDecision(allowed=True)


def check_role(credential: SessionCredential, required_role: str = ROLE_ADMIN) -> GateDecision:
    """Compare the stored role marker against the view's required role.

    Any other value, including a missing role, is denied and redirected
    to login after a short fixed delay.
    """
    if credential.role == required_role:
        return ALLOWED
    logger.info(f"Role gate denied role={credential.role!r}, required {required_role!r}")
    return GateDecision(
        allowed=False,
        message=ACCESS_DENIED_MESSAGE,
        redirect_to=UNAUTHORIZED_REDIRECT,
        delay_seconds=config.ROLE_GATE_DELAY_SECONDS,
    )


def enforce_role(credential: SessionCredential, required_role: str = ROLE_ADMIN) -> None:
    """Raise AccessDeniedError instead of returning a decision."""
    decision = check_role(credential, required_role)
    if not decision.allowed:
        raise AccessDeniedError(
            decision.message,
            required_role=required_role,
            redirect_to=decision.redirect_to,
        )


def is_admin_path(path: str) -> bool:
    """True for /admin and anything below it."""
    route = path.split('?', 1)[0]
    return route == ADMIN_PREFIX or route.startswith(ADMIN_PREFIX + "/")


def resolve_route_gate(path: str, credential: SessionCredential) -> Optional[str]:
    """Redirect target for a path, or None when it may render.

    Admin paths need a token, and then the admin role.
    """
    if not is_admin_path(path):
        return None
    if not credential.is_authenticated:
        return PATH_LOGIN
    if credential.role != ROLE_ADMIN:
        return UNAUTHORIZED_REDIRECT
    return None
