"""The interface every role manager implements, and its errors."""

from __future__ import annotations

from abc import ABC, abstractmethod


class RoleManagerError(Exception):
    """Base class of the errors a role manager raises."""


class DomainParameterError(RoleManagerError, ValueError):
    """More than one domain was passed."""

    def __init__(self, message: str = "domain should be 1 parameter") -> None:
        super().__init__(message)


class NamesNotFoundError(RoleManagerError, LookupError):
    """One or both of the named roles do not exist."""

    def __init__(self, message: str = "error: name1 or name2 does not exist") -> None:
        super().__init__(message)


class NameNotFoundError(RoleManagerError, LookupError):
    """The named role does not exist."""

    def __init__(self, message: str = "error: name does not exist") -> None:
        super().__init__(message)


class RoleManager(ABC):
    """Manages inheritance links between roles, optionally within domains."""

    @abstractmethod
    def clear(self) -> None:
        """Drop all stored data and return to the initial state."""

    @abstractmethod
    def add_link(self, name1: str, name2: str, *domain: str) -> None:
        """Make role ``name1`` inherit role ``name2``."""

    @abstractmethod
    def delete_link(self, name1: str, name2: str, *domain: str) -> None:
        """Remove the link by which ``name1`` inherits ``name2``."""

    @abstractmethod
    def has_link(self, name1: str, name2: str, *domain: str) -> bool:
        """Return whether ``name1`` inherits ``name2``."""

    @abstractmethod
    def get_roles(self, name: str, *domain: str) -> list[str]:
        """Return the roles that ``name`` directly inherits."""

    @abstractmethod
    def get_users(self, name: str, *domain: str) -> list[str]:
        """Return the names that directly inherit role ``name``."""

    @abstractmethod
    def print_roles(self) -> None:
        """Write all role links to the log."""