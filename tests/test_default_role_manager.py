import logging

import pytest

from rolegraph.default_role_manager import DefaultRoleManager
from rolegraph.role_manager import (
    DomainParameterError,
    NameNotFoundError,
    NamesNotFoundError,
    RoleManager,
)


def _build_tree():
    rm = DefaultRoleManager(3)
    rm.add_link("u1", "g1")
    rm.add_link("u2", "g1")
    rm.add_link("u3", "g2")
    rm.add_link("u4", "g2")
    rm.add_link("u4", "g3")
    rm.add_link("g1", "g3")
    return rm


@pytest.fixture
def tree():
    return _build_tree()


@pytest.mark.parametrize(
    "name1, name2, expected",
    [
        ("u1", "g1", True),
        ("u1", "g2", False),
        ("u1", "g3", True),
        ("u2", "g1", True),
        ("u2", "g2", False),
        ("u2", "g3", True),
        ("u3", "g1", False),
        ("u3", "g2", True),
        ("u3", "g3", False),
        ("u4", "g1", False),
        ("u4", "g2", True),
        ("u4", "g3", True),
    ],
)
def test_role_links(tree, name1, name2, expected):
    assert tree.has_link(name1, name2) is expected


@pytest.mark.parametrize(
    "name, roles",
    [
        ("u1", ["g1"]),
        ("u2", ["g1"]),
        ("u3", ["g2"]),
        ("u4", ["g2", "g3"]),
        ("g1", ["g3"]),
        ("g2", []),
        ("g3", []),
    ],
)
def test_role_get_roles(tree, name, roles):
    assert tree.get_roles(name) == roles


@pytest.mark.parametrize(
    "name1, name2, expected",
    [
        ("u1", "g1", True),
        ("u1", "g2", False),
        ("u1", "g3", False),
        ("u2", "g1", True),
        ("u2", "g2", False),
        ("u2", "g3", False),
        ("u3", "g1", False),
        ("u3", "g2", True),
        ("u3", "g3", False),
        ("u4", "g1", False),
        ("u4", "g2", False),
        ("u4", "g3", True),
    ],
)
def test_role_links_after_delete(tree, name1, name2, expected):
    tree.delete_link("g1", "g3")
    tree.delete_link("u4", "g2")
    assert tree.has_link(name1, name2) is expected


@pytest.mark.parametrize(
    "name, roles",
    [
        ("u1", ["g1"]),
        ("u2", ["g1"]),
        ("u3", ["g2"]),
        ("u4", ["g3"]),
        ("g1", []),
        ("g2", []),
        ("g3", []),
    ],
)
def test_role_get_roles_after_delete(tree, name, roles):
    tree.delete_link("g1", "g3")
    tree.delete_link("u4", "g2")
    assert tree.get_roles(name) == roles


def _build_domain_tree():
    rm = DefaultRoleManager(3)
    rm.add_link("u1", "g1", "domain1")
    rm.add_link("u2", "g1", "domain1")
    rm.add_link("u3", "admin", "domain2")
    rm.add_link("u4", "admin", "domain2")
    rm.add_link("u4", "admin", "domain1")
    rm.add_link("g1", "admin", "domain1")
    return rm


@pytest.mark.parametrize(
    "name1, name2, domain, expected",
    [
        ("u1", "g1", "domain1", True),
        ("u1", "g1", "domain2", False),
        ("u1", "admin", "domain1", True),
        ("u1", "admin", "domain2", False),
        ("u2", "g1", "domain1", True),
        ("u2", "g1", "domain2", False),
        ("u2", "admin", "domain1", True),
        ("u2", "admin", "domain2", False),
        ("u3", "g1", "domain1", False),
        ("u3", "g1", "domain2", False),
        ("u3", "admin", "domain1", False),
        ("u3", "admin", "domain2", True),
        ("u4", "g1", "domain1", False),
        ("u4", "g1", "domain2", False),
        ("u4", "admin", "domain1", True),
        ("u4", "admin", "domain2", True),
    ],
)
def test_domain_role_links(name1, name2, domain, expected):
    rm = _build_domain_tree()
    assert rm.has_link(name1, name2, domain) is expected


@pytest.mark.parametrize(
    "name1, name2, domain, expected",
    [
        ("u1", "g1", "domain1", True),
        ("u1", "g1", "domain2", False),
        ("u1", "admin", "domain1", False),
        ("u1", "admin", "domain2", False),
        ("u2", "g1", "domain1", True),
        ("u2", "g1", "domain2", False),
        ("u2", "admin", "domain1", False),
        ("u2", "admin", "domain2", False),
        ("u3", "g1", "domain1", False),
        ("u3", "g1", "domain2", False),
        ("u3", "admin", "domain1", False),
        ("u3", "admin", "domain2", True),
        ("u4", "g1", "domain1", False),
        ("u4", "g1", "domain2", False),
        ("u4", "admin", "domain1", True),
        ("u4", "admin", "domain2", False),
    ],
)
def test_domain_role_links_after_delete(name1, name2, domain, expected):
    rm = _build_domain_tree()
    rm.delete_link("g1", "admin", "domain1")
    rm.delete_link("u4", "admin", "domain2")
    assert rm.has_link(name1, name2, domain) is expected


def test_domain_get_roles_and_users_strip_prefix():
    rm = _build_domain_tree()
    assert rm.get_roles("u4", "domain1") == ["admin"]
    assert sorted(rm.get_users("admin", "domain1")) == ["g1", "u4"]
    assert rm.get_users("admin", "domain2") == ["u3", "u4"]


@pytest.mark.parametrize(
    "name1, name2",
    [(a, b) for a in ("u1", "u2", "u3", "u4") for b in ("g1", "g2", "g3")],
)
def test_clear(tree, name1, name2):
    tree.clear()
    assert tree.has_link(name1, name2) is False


def test_clear_empties_roles(tree):
    tree.clear()
    assert tree.get_roles("u4") == []


def test_same_name_is_linked_even_when_unknown():
    rm = DefaultRoleManager(3)
    assert rm.has_link("nobody", "nobody") is True


def test_hierarchy_level_limits_depth():
    shallow = DefaultRoleManager(1)
    shallow.add_link("u1", "g1")
    shallow.add_link("g1", "g2")
    assert shallow.has_link("u1", "g1") is True
    assert shallow.has_link("u1", "g2") is False

    deep = DefaultRoleManager(2)
    deep.add_link("u1", "g1")
    deep.add_link("g1", "g2")
    assert deep.has_link("u1", "g2") is True


def test_add_link_twice_keeps_one_link():
    rm = DefaultRoleManager(3)
    rm.add_link("u1", "g1")
    rm.add_link("u1", "g1")
    assert rm.get_roles("u1") == ["g1"]


def test_get_users_unknown_name_raises(tree):
    with pytest.raises(NameNotFoundError):
        tree.get_users("non_exist")


def test_get_roles_unknown_name_is_empty(tree):
    assert tree.get_roles("non_exist") == []


def test_delete_link_unknown_raises(tree):
    with pytest.raises(NamesNotFoundError):
        tree.delete_link("u1", "non_exist")


def test_too_many_domains_raise(tree):
    message = "domain should be 1 parameter"
    with pytest.raises(DomainParameterError, match=message):
        tree.add_link("u1", "g1", "d1", "d2")
    with pytest.raises(DomainParameterError, match=message):
        tree.delete_link("u1", "g1", "d1", "d2")
    with pytest.raises(DomainParameterError, match=message):
        tree.has_link("u1", "g1", "d1", "d2")
    with pytest.raises(DomainParameterError, match=message):
        tree.get_roles("u1", "d1", "d2")
    with pytest.raises(DomainParameterError, match=message):
        tree.get_users("g1", "d1", "d2")
    assert tree.get_roles("u1") == ["g1"]
    assert tree.has_link("u1", "g3") is True


def test_is_a_role_manager(tree):
    assert isinstance(tree, RoleManager) and tree.has_link("u1", "g3") is True


def _wildcard(name, pattern):
    if pattern.endswith("*"):
        return name.startswith(pattern[:-1])
    return name == pattern


def test_matching_func_resolves_patterns():
    rm = DefaultRoleManager(3)
    rm.add_matching_func("wildcard", _wildcard)
    rm.add_link("/book/*", "book_group")
    assert rm.has_link("/book/1", "book_group") is True
    assert rm.has_link("/book/2", "book_group") is True
    assert rm.has_link("/pen/1", "book_group") is False


def test_print_roles_logs_links(tree, caplog):
    caplog.set_level(logging.INFO, logger="rolegraph.default_role_manager")
    tree.print_roles()
    assert "u1 < g1" in caplog.text
    assert "u4 < (g2, g3)" in caplog.text
    assert "g1 < g3" in caplog.text


def test_print_roles_silent_when_disabled(tree, caplog):
    caplog.set_level(logging.WARNING, logger="rolegraph.default_role_manager")
    tree.print_roles()
    assert caplog.records == []