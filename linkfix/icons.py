#!/usr/bin/env python3
"""
icons.py - Centralized icon/emoji definitions for LinkFix console output

Usage:
    from linkfix.icons import icons
    print(f"{icons.SUCCESS} Link created")

All unicode characters are defined here once. Never edit unicode
characters in other files - import from this module instead.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Icons:
    """
    Centralized icon definitions.

    Categories:
    - Status: SUCCESS, ERROR, WARNING, INFO, SKIP, DEBUG, FATAL
    - Actions: CREATE, DELETE, MOVE, EXPORT
    - Misc: LINK, FOLDER, LIST
    """

    # =========================================================================
    # Status Icons
    # =========================================================================
    SUCCESS: str = "✅"      # Green checkmark - operation succeeded
    ERROR: str = "❌"        # Red X - operation failed
    WARNING: str = "⚠️"      # Warning triangle
    INFO: str = "ℹ️"         # Information
    SKIP: str = "⏭️"         # Skip forward - skipped
    DEBUG: str = "🔍"        # Magnifier - debug detail
    FATAL: str = "💥"        # Run-stopping failure

    # =========================================================================
    # Action Icons
    # =========================================================================
    CREATE: str = "➕"       # Plus sign
    DELETE: str = "🗑️"       # Trash can
    MOVE: str = "📦"         # Relocated item
    EXPORT: str = "⬇️"       # Download arrow

    # =========================================================================
    # Misc Icons
    # =========================================================================
    LINK: str = "🔗"        # Link item
    FOLDER: str = "📁"      # Folder
    LIST: str = "📋"        # Summary/list


# Global singleton instance
icons = Icons()

# Also export individual icons for convenience
SUCCESS = icons.SUCCESS
ERROR = icons.ERROR
WARNING = icons.WARNING
INFO = icons.INFO
CREATE = icons.CREATE
DELETE = icons.DELETE
MOVE = icons.MOVE
LINK = icons.LINK
LIST = icons.LIST
