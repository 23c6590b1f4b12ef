"""In-memory stub implementation of AccessRegistryProtocol.

This module provides an in-memory implementation for testing and local
development. Not intended for production use.
"""

from __future__ import annotations


class AccessRegistryStub:
    """In-memory implementation of AccessRegistryProtocol.

    Holds a single delegate identity and records every set_delegate call.

    Example:
        >>> stub = AccessRegistryStub(delegate="alice")
        >>> stub.check_is_delegate("alice")
        True
        >>> stub.set_delegate("bob")
        >>> stub.delegate_history
        ['bob']
    """

    def __init__(self, delegate: str | None = None) -> None:
        """Initialize the stub.

        Args:
            delegate: Identity holding the delegate role initially.
        """
        self.delegate = delegate
        self.delegate_history: list[str] = []
        self.fail_on_set_delegate = False

    def check_is_delegate(self, identity: str) -> bool:
        return self.delegate is not None and identity == self.delegate

    def set_delegate(self, identity: str) -> None:
        """Install a new delegate.

        Raises:
            RuntimeError: If fail_on_set_delegate is set, simulating an
                unavailable access registry.
        """
        if self.fail_on_set_delegate:
            raise RuntimeError("access registry unavailable")
        self.delegate = identity
        self.delegate_history.append(identity)
