"""
Environment configuration for numeval.

Parsing recurses once per level of parenthesis or function-call nesting,
and building, rendering and serializing the AST recurse once per tree
level. The recognizer refuses input past a configurable limit on either
instead of letting the interpreter's recursion limit decide.

Serialization through pydantic has its own recursion guard of a few
hundred levels, so limits far above the default make dump_expr() fail
on the tallest accepted trees.

Environment values:
    NUMEVAL_MAX_DEPTH: positive integer, defaults to 100

Usage:
    from numeval.core.environment import get_max_depth

    limit = get_max_depth()
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

# Default nesting limit
DEFAULT_MAX_DEPTH = 100

# Environment variable name
MAX_DEPTH_VAR = "NUMEVAL_MAX_DEPTH"


def get_max_depth() -> int:
    """Get the maximum expression nesting depth from NUMEVAL_MAX_DEPTH.

    Returns:
        The configured limit. Defaults to DEFAULT_MAX_DEPTH if the variable
        is not set or is not a positive integer.

    Examples:
        >>> import os
        >>> os.environ["NUMEVAL_MAX_DEPTH"] = "250"
        >>> get_max_depth()
        250
    """
    raw = os.environ.get(MAX_DEPTH_VAR, "").strip()
    if not raw:
        return DEFAULT_MAX_DEPTH

    try:
        value = int(raw)
    except ValueError:
        value = 0

    if value < 1:
        logger.warning(
            "Invalid %s value '%s'. Expected a positive integer, using %d.",
            MAX_DEPTH_VAR,
            raw,
            DEFAULT_MAX_DEPTH,
        )
        return DEFAULT_MAX_DEPTH
    return value


def resolve_max_depth(override: int | None = None) -> int:
    """Pick an explicit limit if given, otherwise the environment's."""
    if override is not None:
        if override < 1:
            raise ValueError(f"max_depth must be positive, got {override}")
        return override
    return get_max_depth()
