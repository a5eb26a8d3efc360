"""Online-member count for a Yurba dialog.

Members are collected page by page. A failed page is retried (same index)
after a fixed pause; the retry budget is shared by the whole walk and only a
successful page resets it. When the budget runs out the walk stops and the
members gathered so far are used.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from rasgen.errors import UpstreamError
from rasgen.models.yurba import DialogInfo, DialogMember, PresenceSummary
from rasgen.services.field_mapper import online_percentage, presence_color
from rasgen.services.yurba_client import YurbaClient

logger = logging.getLogger(__name__)

PAGE_SIZE = 20
MAX_RETRIES = 3
RETRY_BACKOFF_SECONDS = 1.0


async def collect_dialog_members(
    client: YurbaClient,
    dialog_id: str,
    total_members: int,
    *,
    page_size: int = PAGE_SIZE,
    max_retries: int = MAX_RETRIES,
    backoff_seconds: Optional[float] = None,
) -> list[DialogMember]:
    members: list[DialogMember] = []
    page = 0
    retries = 0
    while len(members) < total_members and retries < max_retries:
        try:
            records = await client.get_members_page(dialog_id, page, page_size)
        except UpstreamError as exc:
            retries += 1
            logger.warning(
                "dialog_members_page_failed dialog=%s page=%s retries=%s/%s error=%s",
                dialog_id,
                page,
                retries,
                max_retries,
                exc.message,
            )
            if retries >= max_retries:
                break
            await asyncio.sleep(RETRY_BACKOFF_SECONDS if backoff_seconds is None else backoff_seconds)
            continue

        if not isinstance(records, list) or not records:
            break
        members.extend(DialogMember.from_record(record) for record in records)
        if len(records) < page_size:
            break
        page += 1
        retries = 0

    if retries >= max_retries:
        logger.warning(
            "dialog_members_partial dialog=%s collected=%s expected=%s",
            dialog_id,
            len(members),
            total_members,
        )
    return members


def summarize_presence(members: list[DialogMember], total_members: int) -> PresenceSummary:
    online = sum(1 for member in members if member.online)
    percentage = online_percentage(online, total_members)
    return PresenceSummary(
        online=online,
        total=total_members,
        percentage=percentage,
        color=presence_color(percentage),
    )


async def dialog_presence(
    client: YurbaClient,
    dialog_id: str,
    *,
    backoff_seconds: Optional[float] = None,
) -> PresenceSummary:
    """Dialog lookup failures propagate; member page failures degrade to partial data."""
    info = DialogInfo.from_payload(await client.get_dialog(dialog_id))
    members = await collect_dialog_members(
        client, dialog_id, info.total_members, backoff_seconds=backoff_seconds
    )
    summary = summarize_presence(members, info.total_members)
    logger.info(
        "dialog_presence dialog=%s name=%s online=%s total=%s collected=%s",
        dialog_id,
        info.name,
        summary.online,
        summary.total,
        len(members),
    )
    return summary
