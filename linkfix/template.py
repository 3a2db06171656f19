#!/usr/bin/env python3
"""
# LinkFix
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

template.py - Find the template link item and park it in the hidden folder

The template is a "Link to a Document" item created through the SharePoint
UI, so SharePoint treats it as executable. Every new link is a server-side
copy of it. Run once per recreate run, before any record is processed:

1. Ensure <library>/<hidden_folder> exists.
2. Template already in the hidden folder -> use it (a previous run moved it).
3. Template in the library root -> copy it into the hidden folder, delete
   the root copy, use the hidden one.
4. Neither -> TemplateNotFoundError. A script cannot make a substitute.

Hiding the template from views is attempted after a move and only logged
when the library refuses.
"""

from __future__ import annotations

from typing import Optional

from linkfix.errors import template_not_found_error
from linkfix.icons import icons
from linkfix.models import TemplateHandle
from linkfix.resource_client import ResourceClient, join_path
from linkfix.run_log import RunLogger


def locate_and_relocate_template(
    client: ResourceClient,
    container: str,
    template_name: str,
    hidden_folder: str,
    logger: Optional[RunLogger] = None,
) -> TemplateHandle:
    """
    Resolve the single template for this run.

    Args:
        client: Connected resource client
        container: Server-relative path of the library (or folder) to fill
        template_name: Leaf name of the template item, e.g. "test.aspx"
        hidden_folder: Name of the folder that keeps the template out of sight
        logger: Optional run logger

    Returns:
        Resolved TemplateHandle pointing into the hidden folder

    Raises:
        TemplateNotFoundError: if the template is in neither location
    """
    hidden_dir = join_path(container, hidden_folder)
    hidden_path = join_path(hidden_dir, template_name)
    root_path = join_path(container, template_name)

    client.create_folder(container, hidden_folder)

    if client.folder_contains(hidden_dir, template_name):
        _info(logger, f"[template] Using template at {hidden_path}")
        return TemplateHandle(current_location_path=hidden_path, resolved=True)

    if client.folder_contains(container, template_name):
        _info(logger, f"[template] {icons.MOVE} Moving template {root_path} -> {hidden_path}")
        client.duplicate_resource(root_path, hidden_path, overwrite=False)
        client.delete_resource(root_path, recycle=True)
        _hide(client, hidden_path, logger)
        return TemplateHandle(current_location_path=hidden_path, resolved=True, relocated=True)

    raise template_not_found_error(template_name, [hidden_path, root_path])


def _hide(client: ResourceClient, path: str, logger: Optional[RunLogger]) -> None:
    try:
        client.set_hidden(path)
    except Exception as e:
        if logger:
            logger.log_error(f"[template:warn] Could not hide template {path}",
                             f"{type(e).__name__}: {e}")


def _info(logger: Optional[RunLogger], message: str) -> None:
    if logger:
        logger.info(message)
    else:
        print(message)
