#!/usr/bin/env python3
"""
# LinkFix
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

materialize.py - Create one link item per record from the template

For each record, in input order:

1. sanitize the title into a base name
2. pick a free leaf name in the library
3. server-side copy the template to <library>/<leaf name>
4. rewrite Title, FileLeafRef, URL ("<url>, <display text>") and
   _ShortcutUrl (raw url) on the new item

A failure in steps 2-4 marks that record Failed and moves on to the next.
Nothing is rolled back: a copy whose fields could not be written stays in
the library and its path is in the error log.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from linkfix.models import (
    LinkFields,
    LinkRecord,
    LinkStatus,
    MaterializedLink,
    TemplateHandle,
)
from linkfix.names import resolve_unique_name, sanitize
from linkfix.resource_client import ResourceClient, join_path
from linkfix.run_log import RunLogger
from linkfix.icons import icons


def _write_fields(
    client: ResourceClient,
    record: LinkRecord,
    generated_name: str,
    target_path: str,
) -> None:
    fields = LinkFields.for_record(record, generated_name)
    fields.validate()
    handle = client.get_resource_as_record(target_path)
    client.set_record_fields(handle, fields.to_field_map())


def materialize(
    client: ResourceClient,
    records: Iterable[LinkRecord],
    template: TemplateHandle,
    container: str,
    logger: Optional[RunLogger] = None,
    extension: str = ".aspx",
) -> List[MaterializedLink]:
    """
    Create link items for every record.

    Args:
        client: Connected resource client
        records: Validated records, processed in order
        template: Resolved template handle from locate_and_relocate_template()
        container: Server-relative library path for the new items
        logger: Optional run logger
        extension: Leaf name extension of link items

    Returns:
        One MaterializedLink per record, in input order

    Raises:
        ValueError: if the template handle is not resolved
    """
    if not template.resolved:
        raise ValueError("Template handle must be resolved before materializing links")

    results: List[MaterializedLink] = []
    for record in records:
        generated_name = ""
        target_path = ""
        copied = False
        try:
            generated_name = resolve_unique_name(client, container, sanitize(record.title), extension)
            target_path = join_path(container, generated_name)
            client.duplicate_resource(template.current_location_path, target_path, overwrite=False)
            copied = True
            _write_fields(client, record, generated_name, target_path)
        except Exception as e:
            detail = f"{type(e).__name__}: {e}"
            if copied:
                detail += f"\nPartial copy left at {target_path}"
            results.append(MaterializedLink(
                record=record,
                generated_name=generated_name,
                target_path=target_path,
                status=LinkStatus.FAILED,
                failure_detail=detail,
            ))
            message = f"[link] Failed '{record.title}' -> {record.target_url}"
            if logger:
                logger.log_error(message, detail)
            else:
                print(f"{icons.ERROR} {message}: {detail}")
            continue

        results.append(MaterializedLink(
            record=record,
            generated_name=generated_name,
            target_path=target_path,
            status=LinkStatus.CREATED,
        ))
        message = f"[link] {icons.CREATE} {generated_name} -> {record.target_url}"
        if logger:
            logger.info(message)
        else:
            print(message)

    return results
