#!/usr/bin/env python3
"""
# LinkFix
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

recreate.py (LinkFix)

One recreate run against one library:

1. connect (unless a client is supplied)
2. check the library has the link fields we write
3. locate the template, moving it into the hidden folder if needed
4. import the CSV
5. create one link item per record
6. report totals and log locations

Steps 1-4 are fatal on failure. Per-record failures in step 5 are logged
and counted; the run still reports its summary.

Only one run may target a given library at a time: name resolution is
check-then-act and two concurrent runs can pick the same name.
"""

from __future__ import annotations

from typing import Optional

from linkfix.config_utils import LinkFixConfig
from linkfix.errors import missing_fields_error
from linkfix.icons import icons
from linkfix.import_records import import_records
from linkfix.materialize import materialize
from linkfix.models import REQUIRED_FIELDS, RunSummary
from linkfix.resource_client import ResourceClient
from linkfix.run_log import RunLogger
from linkfix.template import locate_and_relocate_template


def check_schema(client: ResourceClient, library: str) -> None:
    """
    Raises:
        SchemaError: if any field the rewrite needs is missing
    """
    present = client.get_field_names(library)
    missing = [name for name in REQUIRED_FIELDS if name not in present]
    if missing:
        raise missing_fields_error(library, missing)


def report_summary(summary: RunSummary, logger: RunLogger) -> None:
    logger.info("")
    logger.info(f"[recreate] {icons.LIST} Summary")
    logger.info(f"  Attempted: {summary.attempted}")
    logger.info(f"  Created:   {summary.created}")
    logger.info(f"  Failed:    {summary.failed}")
    logger.info(f"  Rejected:  {summary.rejected} input row(s)")
    logger.info(f"  Error log:  {summary.error_log_path}")
    logger.info(f"  Transcript: {summary.transcript_path}")


def run_recreate(
    config: LinkFixConfig,
    logger: RunLogger,
    client: Optional[ResourceClient] = None,
) -> RunSummary:
    """
    Recreate every link listed in config.input_csv inside config.library.

    Args:
        config: Loaded configuration (library, template, CSV, ...)
        logger: Open run logger; the caller owns closing it
        client: Connected resource client, or None to connect to SharePoint

    Returns:
        RunSummary with one result per accepted record

    Raises:
        LinkFixError: on any fatal condition (nothing is attempted)
    """
    summary = RunSummary(
        error_log_path=logger.error_log_path,
        transcript_path=logger.transcript_path,
    )

    if client is None:
        from linkfix.sharepoint_client import make_sharepoint_client

        logger.info(f"[recreate] Connecting to {config.site_url}")
        client = make_sharepoint_client(config)

    library = config.library
    logger.info(f"[recreate] Library: {library}")
    check_schema(client, library)

    template = locate_and_relocate_template(
        client,
        library,
        config.template_name,
        config.hidden_folder,
        logger,
    )

    records = import_records(config.resolve_path(config.input_csv), logger)
    summary.rejected = len(records.rejected)

    logger.info(f"[recreate] Creating {len(records)} link(s) from {template.current_location_path}")
    summary.results = materialize(
        client,
        records,
        template,
        library,
        logger,
        extension=config.extension,
    )

    report_summary(summary, logger)
    return summary
