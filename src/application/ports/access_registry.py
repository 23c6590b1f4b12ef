"""Access registry port.

The access registry is the membership/access-control collaborator. It
knows who the current delegate is and is told when a new delegate has
been elected.
"""

from __future__ import annotations

from typing import Protocol


class AccessRegistryProtocol(Protocol):
    """Protocol for the access-control collaborator.

    set_delegate is called by the election service after an accepted,
    single-winner tally and never by the tally itself.
    """

    def check_is_delegate(self, identity: str) -> bool:
        """Check whether ``identity`` is the current delegate.

        Args:
            identity: Member identity to check.

        Returns:
            True if the identity holds the delegate role.
        """
        ...

    def set_delegate(self, identity: str) -> None:
        """Install ``identity`` as the delegate.

        Args:
            identity: The newly elected delegate.
        """
        ...
