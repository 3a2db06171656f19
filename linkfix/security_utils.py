#!/usr/bin/env python3
"""
security_utils.py (LinkFix)

Safe credential loading and secret masking for SharePoint connections.
"""

from __future__ import annotations

import os
import re
import stat
import warnings
from pathlib import Path
from typing import Dict, Optional


# ============================================================================
# Credential Loading (Safe - No exec())
# ============================================================================

class CredentialError(Exception):
    """Raised when credentials cannot be loaded or are invalid."""
    pass


CREDENTIAL_KEYS = ("SITE_URL", "CLIENT_ID", "CLIENT_SECRET", "USERNAME", "PASSWORD")


def parse_credentials_file(cred_file: Path) -> Dict[str, str]:
    """
    Parse a credentials file without executing it.

    Supports formats:
    - CLIENT_ID = "value" or CLIENT_ID = 'value'
    - CLIENT_ID=value (no quotes)
    - CLIENT_ID: value (YAML-style)

    Returns:
        Mapping of the recognised keys that were found

    Raises:
        CredentialError: if the file does not exist
    """
    if not cred_file.is_file():
        raise CredentialError(f"Credentials file not found: {cred_file}")

    check_file_permissions(cred_file)
    content = cred_file.read_text(encoding="utf-8")

    found: Dict[str, str] = {}
    for key in CREDENTIAL_KEYS:
        match = re.search(
            rf'^\s*{key}\s*[=:]\s*["\']?([^"\'\n]+?)["\']?\s*$',
            content,
            re.MULTILINE,
        )
        if match:
            found[key] = match.group(1).strip()
    return found


def check_file_permissions(file_path: Path, warn_only: bool = True) -> bool:
    """
    Check if file has secure permissions (not readable by group/others).

    Args:
        file_path: Path to check
        warn_only: If True, warn but don't raise. If False, raise on insecure.

    Returns:
        True if permissions are secure, False otherwise
    """
    try:
        mode = os.stat(file_path).st_mode
        is_secure = not (mode & (stat.S_IRWXG | stat.S_IRWXO))

        if not is_secure:
            msg = (
                f"Credentials file has insecure permissions: {file_path}\n"
                f"Other users may be able to read your client secret.\n"
                f"Fix with: chmod 600 {file_path}"
            )
            if warn_only:
                warnings.warn(msg, UserWarning)
            else:
                raise CredentialError(msg)

        return is_secure
    except OSError:
        # Can't check permissions (e.g., Windows)
        return True


# ============================================================================
# Secret Masking for Logs
# ============================================================================

def mask_sensitive(value: Optional[str], visible_chars: int = 4) -> str:
    """
    Mask a sensitive value for safe logging.

    Args:
        value: The sensitive string to mask
        visible_chars: Number of characters to show at start and end

    Returns:
        Masked string like "abc1****xyz9"
    """
    if not value:
        return "****"

    if len(value) <= visible_chars * 2:
        return "****"

    return f"{value[:visible_chars]}****{value[-visible_chars:]}"
