import logging
import secrets
from typing import Optional

from voting_portal.config import ADMIN_PASSWORD
from voting_portal.domain.errors import ForbiddenError

logger = logging.getLogger(__name__)


def verify_admin_password(password: Optional[str], expected: str = ADMIN_PASSWORD) -> bool:
    if not isinstance(password, str) or not expected:
        return False
    return secrets.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))


def require_admin(password: Optional[str], expected: str = ADMIN_PASSWORD) -> None:
    if not verify_admin_password(password, expected):
        logger.warning("Rejected admin request with an invalid password")
        raise ForbiddenError("Invalid admin password")
