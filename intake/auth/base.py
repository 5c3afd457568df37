from abc import ABC, abstractmethod


class BaseAuthProvider(ABC):
    """Contract for all authentication providers."""

    @abstractmethod
    def current_owner_id(self) -> str:
        """Return the identity of the caller.

        Raises:
            UnauthenticatedError: if no identity is established.
        """
