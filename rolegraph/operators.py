"""Built-in matching functions for use in policy matchers."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Callable
from typing import Any

from rolegraph.role_manager import RoleManager, RoleManagerError

_KEY2_PARAM = re.compile(r"(.*):[^/]+(.*)")
_KEY3_PARAM = re.compile(r"(.*)\{[^/]+\}(.*)")


def key_match(key1: str, key2: str) -> bool:
    """Return whether ``key1`` matches ``key2``, where ``key2`` may end in ``*``.

    For example, ``"/foo/bar"`` matches ``"/foo/*"``.
    """
    i = key2.find("*")
    if i == -1:
        return key1 == key2
    if len(key1) > i:
        return key1[:i] == key2[:i]
    return key1 == key2[:i]


def key_match_func(*args: Any) -> bool:
    """Call :func:`key_match` with the first two arguments."""
    return key_match(args[0], args[1])


def _substitute_params(key2: str, marker: str, pattern: re.Pattern[str], group: str) -> str:
    key2 = key2.replace("/*", "/.*")
    while marker in key2:
        key2 = pattern.sub(rf"\g<1>{group}\g<2>", key2)
    return key2


def key_match2(key1: str, key2: str) -> bool:
    """Return whether ``key1`` matches the RESTful pattern ``key2``.

    ``key2`` may hold ``*`` and ``:name`` parameters, so ``"/resource1"``
    matches ``"/:resource"``.
    """
    key2 = _substitute_params(key2, "/:", _KEY2_PARAM, "[^/]+")
    return regex_match(key1, "^" + key2 + r"\Z")


def key_match2_func(*args: Any) -> bool:
    """Call :func:`key_match2` with the first two arguments."""
    return key_match2(args[0], args[1])


def key_match3(key1: str, key2: str) -> bool:
    """Return whether ``key1`` matches the RESTful pattern ``key2``.

    ``key2`` may hold ``*`` and ``{name}`` parameters, so ``"/resource1"``
    matches ``"/{resource}"``.
    """
    key2 = _substitute_params(key2, "/{", _KEY3_PARAM, "[^/]+")
    return regex_match(key1, "^" + key2 + r"\Z")


def key_match3_func(*args: Any) -> bool:
    """Call :func:`key_match3` with the first two arguments."""
    return key_match3(args[0], args[1])


def key_match4(key1: str, key2: str) -> bool:
    """Like :func:`key_match3`, but repeated parameters must take equal values.

    ``"/parent/123/child/123"`` matches ``"/parent/{id}/child/{id}"`` while
    ``"/parent/123/child/456"`` does not.
    """
    key2 = key2.replace("/*", "/.*")

    tokens: list[str] = []
    start = -1
    for i, c in enumerate(key2):
        if c == "{":
            start = i
        elif c == "}":
            tokens.append(key2[start : i + 1])

    key2 = _substitute_params(key2, "/{", _KEY3_PARAM, "([^/]+)")

    match = re.match("^" + key2 + r"\Z", key1)
    if match is None:
        return False
    values = match.groups()

    if len(tokens) != len(values):
        raise ValueError("KeyMatch4: number of tokens is not equal to number of values")

    seen: dict[str, str] = {}
    for token, value in zip(tokens, values):
        if seen.setdefault(token, value) != value:
            return False
    return True


def key_match4_func(*args: Any) -> bool:
    """Call :func:`key_match4` with the first two arguments."""
    return key_match4(args[0], args[1])


def regex_match(key1: str, key2: str) -> bool:
    """Return whether the regular expression ``key2`` matches within ``key1``.

    An invalid pattern raises :class:`re.error`.
    """
    return re.search(key2, key1) is not None


def regex_match_func(*args: Any) -> bool:
    """Call :func:`regex_match` with the first two arguments."""
    return regex_match(args[0], args[1])


def _parse_ip(text: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    try:
        ip = ipaddress.ip_address(text)
    except ValueError:
        return None
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def ip_match(ip1: str, ip2: str) -> bool:
    """Return whether address ``ip1`` equals ``ip2`` or lies in the CIDR ``ip2``.

    For example, ``"192.168.2.123"`` matches ``"192.168.2.0/24"``.
    """
    addr1 = _parse_ip(ip1)
    if addr1 is None:
        raise ValueError("invalid argument: ip1 in IPMatch() function is not an IP address.")

    if "/" in ip2:
        try:
            network = ipaddress.ip_network(ip2, strict=False)
        except ValueError:
            network = None
        if network is not None:
            return addr1 in network

    addr2 = _parse_ip(ip2)
    if addr2 is None:
        raise ValueError(
            "invalid argument: ip2 in IPMatch() function is neither an IP address nor a CIDR."
        )
    return addr1 == addr2


def ip_match_func(*args: Any) -> bool:
    """Call :func:`ip_match` with the first two arguments."""
    return ip_match(args[0], args[1])


def generate_g_function(rm: RoleManager | None) -> Callable[..., bool]:
    """Build the ``g(name1, name2[, domain])`` function for a role manager.

    Without a role manager the names are simply compared. Errors from the
    role manager count as no link.
    """

    def g(*args: Any) -> bool:
        name1: str = args[0]
        name2: str = args[1]
        if rm is None:
            return name1 == name2
        domain = () if len(args) == 2 else (args[2],)
        try:
            return rm.has_link(name1, name2, *domain)
        except RoleManagerError:
            return False

    return g