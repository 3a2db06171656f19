#!/usr/bin/env python3
"""
names.py (LinkFix)

Leaf-name helpers for new link items.

- sanitize() turns a display title into a base name SharePoint accepts.
- resolve_unique_name() finds the first free "<base>[-N]<ext>" in a library.

resolve_unique_name() is check-then-act: two runs against the same library
can pick the same name. Only one recreate run may target a library at a time.
"""

from __future__ import annotations

import re

from linkfix.errors import NameResolutionError
from linkfix.resource_client import ResourceClient, join_path

# Characters SharePoint rejects in file names, plus ASCII control characters
ILLEGAL_CHARS = '"*:<>?/\\|#%~&'
ILLEGAL_PATTERN = re.compile(r'["*:<>?/\\|#%~&\x00-\x1f\x7f]')
SUBSTITUTE = "_"
FALLBACK_NAME = "Link"

DEFAULT_MAX_ATTEMPTS = 1000


def sanitize(raw_title: str) -> str:
    """
    Make a title safe to use as a leaf name.

    Every illegal character becomes "_", surrounding whitespace is trimmed,
    and an empty result falls back to "Link".
    """
    safe = ILLEGAL_PATTERN.sub(SUBSTITUTE, raw_title or "").strip()
    return safe or FALLBACK_NAME


def resolve_unique_name(
    client: ResourceClient,
    container: str,
    base_name: str,
    extension: str = ".aspx",
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """
    Return the first leaf name not already present in container.

    Tries base_name + extension, then base_name-1, base_name-2, ...

    Raises:
        NameResolutionError: if max_attempts candidates are all taken
    """
    candidate = f"{base_name}{extension}"
    counter = 0
    while client.resource_exists(join_path(container, candidate)):
        counter += 1
        if counter >= max_attempts:
            raise NameResolutionError(
                message=f"No free name for '{base_name}' after {max_attempts} attempts",
                suggestion="Clean up old copies in the library or rename the input title",
                context={"container": container, "base_name": base_name},
            )
        candidate = f"{base_name}-{counter}{extension}"
    return candidate
