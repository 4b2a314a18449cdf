"""The default in-memory role manager."""

from __future__ import annotations

import logging
from collections.abc import Callable

from rolegraph.role_manager import (
    DomainParameterError,
    NameNotFoundError,
    NamesNotFoundError,
    RoleManager,
)

MatchingFunc = Callable[[str, str], bool]

_logger = logging.getLogger(__name__)


class _Role:
    """A named role and the roles it directly inherits."""

    __slots__ = ("name", "roles")

    def __init__(self, name: str) -> None:
        self.name = name
        self.roles: list[_Role] = []

    def add_role(self, role: _Role) -> None:
        if not self.has_direct_role(role.name):
            self.roles.append(role)

    def delete_role(self, role: _Role) -> None:
        for existing in self.roles:
            if existing.name == role.name:
                self.roles.remove(existing)
                return

    def has_role(self, name: str, hierarchy_level: int) -> bool:
        if self.name == name:
            return True
        if hierarchy_level <= 0:
            return False
        return any(role.has_role(name, hierarchy_level - 1) for role in self.roles)

    def has_direct_role(self, name: str) -> bool:
        return any(role.name == name for role in self.roles)

    def role_names(self) -> list[str]:
        return [role.name for role in self.roles]

    def __str__(self) -> str:
        if not self.roles:
            return ""
        names = ", ".join(self.role_names())
        if len(self.roles) != 1:
            names = f"({names})"
        return f"{self.name} < {names}"


def _prefixed(domain: tuple[str, ...], *names: str) -> list[str]:
    if len(domain) > 1:
        raise DomainParameterError()
    if domain:
        return [f"{domain[0]}::{name}" for name in names]
    return list(names)


def _strip_domain(domain: tuple[str, ...], names: list[str]) -> list[str]:
    if domain:
        cut = len(domain[0]) + 2
        return [name[cut:] for name in names]
    return names


class DefaultRoleManager(RoleManager):
    """Keeps role links in memory and follows them up to a depth limit."""

    def __init__(self, max_hierarchy_level: int = 10) -> None:
        self._all_roles: dict[str, _Role] = {}
        self.max_hierarchy_level = max_hierarchy_level
        self._matching_func: MatchingFunc | None = None

    def add_matching_func(self, name: str, fn: MatchingFunc) -> None:
        """Set the pattern function used to match names against stored roles.

        Only one function is kept; a later call replaces the earlier one.
        """
        self._matching_func = fn

    def _has_role(self, name: str) -> bool:
        if self._matching_func is not None:
            return any(self._matching_func(name, key) for key in list(self._all_roles))
        return name in self._all_roles

    def _create_role(self, name: str) -> _Role:
        if self._matching_func is not None:
            for key in list(self._all_roles):
                if self._matching_func(name, key):
                    name = key
        role = self._all_roles.get(name)
        if role is None:
            role = _Role(name)
            self._all_roles[name] = role
        return role

    def clear(self) -> None:
        self._all_roles = {}

    def add_link(self, name1: str, name2: str, *domain: str) -> None:
        name1, name2 = _prefixed(domain, name1, name2)
        role1 = self._create_role(name1)
        role2 = self._create_role(name2)
        role1.add_role(role2)

    def delete_link(self, name1: str, name2: str, *domain: str) -> None:
        name1, name2 = _prefixed(domain, name1, name2)
        if not self._has_role(name1) or not self._has_role(name2):
            raise NamesNotFoundError()
        role1 = self._create_role(name1)
        role2 = self._create_role(name2)
        role1.delete_role(role2)

    def has_link(self, name1: str, name2: str, *domain: str) -> bool:
        name1, name2 = _prefixed(domain, name1, name2)
        if name1 == name2:
            return True
        if not self._has_role(name1) or not self._has_role(name2):
            return False
        return self._create_role(name1).has_role(name2, self.max_hierarchy_level)

    def get_roles(self, name: str, *domain: str) -> list[str]:
        (name,) = _prefixed(domain, name)
        if not self._has_role(name):
            return []
        return _strip_domain(domain, self._create_role(name).role_names())

    def get_users(self, name: str, *domain: str) -> list[str]:
        (name,) = _prefixed(domain, name)
        if not self._has_role(name):
            raise NameNotFoundError()
        names = [role.name for role in self._all_roles.values() if role.has_direct_role(name)]
        return _strip_domain(domain, names)

    def print_roles(self) -> None:
        if _logger.isEnabledFor(logging.INFO):
            text = ", ".join(filter(None, (str(role) for role in self._all_roles.values())))
            _logger.info(text)