"""Application layer - Dependency spec parsing."""

from typing import Any, List

from keywire.domain import DependencyLink


def parse_dependencies(spec: Any) -> List[DependencyLink]:
    """Parse a dependency spec into ordered links.

    The spec is a comma separated list of tokens. A token ``alias = key``
    wires the registration ``key`` into the property ``alias``; a bare token
    ``key`` wires it into a property of the same name. Whitespace around
    tokens and around ``=`` is ignored and empty tokens are dropped.

    Args:
        spec: The spec string. None, blank and non-string values yield no links.

    Returns:
        Links in left-to-right order of the spec.

    Example:
        >>> [(link.alias, link.target_key) for link in parse_dependencies(" bee = b ,be=b ")]
        [('bee', 'b'), ('be', 'b')]
    """
    if not isinstance(spec, str):
        return []

    links = []
    for token in spec.split(","):
        token = token.strip()
        if not token:
            continue

        alias, separator, target_key = token.partition("=")
        alias = alias.strip()
        target_key = target_key.strip()
        if not separator:
            target_key = alias

        # One-sided assignments fall back to the side that is present
        alias = alias or target_key
        target_key = target_key or alias
        if not alias:
            continue

        links.append(DependencyLink(alias=alias, target_key=target_key))
    return links
