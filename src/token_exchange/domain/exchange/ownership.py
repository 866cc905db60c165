"""Single-administrator access gate.

The gate holds the administrator identity and rejects privileged calls
from anyone else. It is composed into the exchange ledger rather than
inherited from.
"""

import logging
from typing import Optional

from ...constants.errors import ErrorMessages
from ..errors import Unauthorized

logger = logging.getLogger(__name__)


class OwnershipGate:
    """Holds the current administrator and guards privileged calls.

    Parameters
    ----------
    owner : str
        Initial administrator identity

    Notes
    -----
    After ``renounce_ownership`` the gate has no owner and every
    privileged call is rejected from then on.

    Examples
    --------
    >>> gate = OwnershipGate("admin")
    >>> gate.require_owner("admin")
    >>> gate.require_owner("mallory")
    Traceback (most recent call last):
    ...
    token_exchange.domain.errors.Unauthorized: Unauthorized account: mallory
    """

    def __init__(self, owner: str):
        if not owner:
            raise ValueError("Owner identity must be non-empty")
        self._owner: Optional[str] = owner

    @property
    def owner(self) -> Optional[str]:
        """Current administrator, or None once renounced."""
        return self._owner

    def require_owner(self, caller: str) -> None:
        """Reject ``caller`` unless it is the current administrator.

        Raises
        ------
        Unauthorized
            If ``caller`` is not the administrator
        """
        if self._owner is None or caller != self._owner:
            logger.warning(f"Rejected privileged call from {caller}")
            raise Unauthorized(
                ErrorMessages.format_unauthorized(caller), caller=caller
            )

    def transfer_ownership(self, caller: str, new_owner: str) -> str:
        """Hand the administrator role to ``new_owner``.

        Returns
        -------
        str
            The previous administrator

        Raises
        ------
        Unauthorized
            If ``caller`` is not the administrator
        ValueError
            If ``new_owner`` is empty
        """
        self.require_owner(caller)
        if not new_owner:
            raise ValueError("New owner identity must be non-empty")
        previous = self._owner
        self._owner = new_owner
        logger.info(f"Ownership transferred from {previous} to {new_owner}")
        return previous

    def renounce_ownership(self, caller: str) -> None:
        """Leave the gate without an administrator."""
        self.require_owner(caller)
        logger.info(f"Ownership renounced by {caller}")
        self._owner = None

    def snapshot(self) -> Optional[str]:
        """Capture the current administrator for a later ``restore``."""
        return self._owner

    def restore(self, owner: Optional[str]) -> None:
        """Reset the administrator to a value captured by ``snapshot``."""
        self._owner = owner
