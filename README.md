# rolegraph

Building blocks for role-based access control: an in-memory role
inheritance graph with optional domains, the matching operators commonly
used in policy matchers, and a few small helpers for handling policy
text. The package has no dependencies outside the standard library.

## Installation

```
pip install rolegraph
```

The package's `__init__` imports nothing; import the submodules you need:
`rolegraph.role_manager`, `rolegraph.default_role_manager`,
`rolegraph.operators` and `rolegraph.util`.

## Role inheritance

`DefaultRoleManager` stores "inherits" links between names. A user can
inherit a role, and a role can inherit another role. `has_link` follows
the chain up to a maximum depth, given to the constructor (10 if not
given). A name always has a link to itself.

```python
from rolegraph.default_role_manager import DefaultRoleManager

rm = DefaultRoleManager(10)
rm.add_link("alice", "admin")
rm.add_link("admin", "staff")

rm.has_link("alice", "staff")   # True
rm.get_roles("alice")           # ["admin"]  (direct roles only)
rm.get_users("admin")           # ["alice"]  (direct members only)

rm.delete_link("admin", "staff")
rm.has_link("alice", "staff")   # False

rm.clear()                      # forget every link
```

`get_roles` returns an empty list for a name the manager does not know.

### Domains

Every method that takes names also takes an optional domain. Links made
in one domain are not seen from another.

```python
rm.add_link("bob", "admin", "tenant1")
rm.has_link("bob", "admin", "tenant1")   # True
rm.has_link("bob", "admin", "tenant2")   # False
rm.get_roles("bob", "tenant1")           # ["admin"]
```

### Errors

All errors derive from `RoleManagerError` in `rolegraph.role_manager`:

- `DomainParameterError` (also a `ValueError`): more than one domain was passed.
- `NamesNotFoundError` (also a `LookupError`): `delete_link` was given a
  name the manager does not know.
- `NameNotFoundError` (also a `LookupError`): `get_users` was given a
  name the manager does not know.

`rolegraph.role_manager.RoleManager` is the abstract interface
(`clear`, `add_link`, `delete_link`, `has_link`, `get_roles`,
`get_users`, `print_roles`) that `DefaultRoleManager` implements and that
a custom role manager can implement too.

### Pattern roles

With a matching function, stored role names act as patterns for the
names you look up:

```python
from rolegraph.default_role_manager import DefaultRoleManager
from rolegraph.operators import key_match2

rm = DefaultRoleManager(10)
rm.add_matching_func("key_match2", key_match2)
rm.add_link("/book/:id", "book_group")
rm.has_link("/book/1", "book_group")   # True
```

Only one matching function is kept; adding another replaces it.

### Logging

`print_roles()` writes a one-line summary of all links, such as
`u4 < (g2, g3), g1 < g3`, to the `rolegraph.default_role_manager` logger
at INFO level, and does nothing if that level is not enabled.

## Matching operators

`rolegraph.operators` provides:

| Function       | Pattern example                 | Matches                    |
|----------------|---------------------------------|----------------------------|
| `key_match`    | `/foo/*`                        | `/foo/bar`                 |
| `key_match2`   | `/proxy/:id/*`                  | `/proxy/42/res`            |
| `key_match3`   | `/proxy/{id}/*`                 | `/proxy/42/res`            |
| `key_match4`   | `/parent/{id}/child/{id}`       | `/parent/1/child/1` only   |
| `regex_match`  | `/topic/edit/[0-9]+`            | `/topic/edit/123`          |
| `ip_match`     | `192.168.2.0/24`                | `192.168.2.123`            |

Each is called as `f(key, pattern)`. `regex_match` searches anywhere in
the key, so `/topic/create/123` matches `/topic/create`; an invalid
pattern raises `re.error`. `ip_match` accepts an address or a CIDR as the
pattern and raises `ValueError` when either argument is not a valid
address. `key_match4` raises `ValueError` if its parameters cannot be
paired with the captured values.

Each has a `*_func(*args)` form taking the two strings as positional
arguments, for use as a function in an expression evaluator.
`generate_g_function(rm)` returns such a function,
`g(name1, name2[, domain])`, that checks role inheritance through a role
manager, treating a role manager error as no link; with `None` it just
compares the two names.

## Helpers

`rolegraph.util` has small helpers for policy handling:

- `escape_assertion(s)`: turns `r.sub` / `p.sub` into `r_sub` / `p_sub`
  in a matcher expression, leaving deeper attribute access alone.
- `remove_comments(s)`: strips a trailing `#` comment.
- `array_equals(a, b)`, `array_2d_equals(a, b)`: ordered comparison.
- `set_equals(a, b)`: comparison ignoring order.
- `array_remove_duplicates(s)`: a new list without duplicates, first
  occurrence kept.
- `array_to_string(s)`, `params_to_string(*args)`: join with `", "`.
- `join_slice(a, *args)`: `[a, *args]`.
- `set_subtract(a, b)`: items of `a` not in `b`, in order.

## What this package does not do

There is no enforcer here: the package does not read model or policy
files, store policies, evaluate matcher expressions or decide requests.
It supplies the role graph, the operators and the helpers that such an
enforcer would use.

## Running the tests

```
pip install -e ".[test]"
pytest
```