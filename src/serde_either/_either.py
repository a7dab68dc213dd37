"""Either: common base of the either-types."""

from abc import ABC, abstractmethod


class Either(ABC):
    """Abstract base of a closed sum type whose payload encodes without a wrapper."""

    __slots__ = ()

    @property
    @abstractmethod
    def payload(self) -> object:
        """The active variant's payload."""
