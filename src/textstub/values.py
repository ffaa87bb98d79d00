"""Generic YAML value tree and fail-soft accessors.

Documents are loaded with a `yaml.BaseLoader` derived loader, which never
resolves implicit scalar types. The resulting tree has exactly three
variants: text scalars, ordered sequences and mappings keyed by text.

The accessors below never raise. A missing key and a value of the wrong
shape are both reported as absence, so that schema variations across
TBD versions do not break parsing.
"""

#: Scalars are always text, including empty values.
type Scalar = str

#: A node of a loaded YAML document.
type Node = Scalar | list['Node'] | dict[str, 'Node']

SCALARS = (str,)
SEQUENCES = (list,)
MAPPINGS = (dict,)


def get_vector(node: Node, key: str) -> list[Node]:
    """Get a sequence bound to a mapping key.

    Args:
        node: Node expected to be a mapping.
        key: Mapping key to look up.

    Returns:
        Members of the sequence, or an empty list if `node` is not
        a mapping, has no `key`, or `key` is not bound to a sequence.
    """
    if isinstance(node, MAPPINGS):
        value = node.get(key)
        if isinstance(value, SEQUENCES):
            return list(value)

    return []


def get_string_vector(node: Node, key: str) -> list[str]:
    """Get scalar members of a sequence bound to a mapping key.

    Non-scalar members are skipped.

    Args:
        node: Node expected to be a mapping.
        key: Mapping key to look up.

    Returns:
        Scalar members of the sequence in their original order.
    """
    return [
        member
        for member in get_vector(node, key)
        if isinstance(member, SCALARS)
    ]


def get_string(node: Node, key: str) -> str | None:
    """Get a scalar bound to a mapping key.

    Args:
        node: Node expected to be a mapping.
        key: Mapping key to look up.

    Returns:
        The scalar value, or `None` if it is absent or not a scalar.
    """
    if isinstance(node, MAPPINGS):
        value = node.get(key)
        if isinstance(value, SCALARS):
            return value

    return None


def contains(sequence: list[Node], key: str) -> bool:
    """Check whether a scalar member of a sequence equals `key` exactly."""
    return any(
        isinstance(member, SCALARS) and member == key
        for member in sequence
    )
