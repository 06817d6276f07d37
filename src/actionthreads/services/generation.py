"""Derive action points from a transcript with the external summarizer.

The summarizer is asked for a JSON array of ``{"title": ...}`` objects. Its
reply is treated strictly: anything that does not contain such an array is a
hard failure (``ActionPointGenerationError``), never a silent no-op.
"""
from __future__ import annotations

import json
import logging
import re
import uuid

from openai import OpenAIError
from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.core.errors import ActionPointGenerationError
from actionthreads.core.modelhub import Summarizer
from actionthreads.models.action_point import ActionPoint, ACTION_POINT_TITLE_MAX_LENGTH
from actionthreads.services.action_point import create_action_point, list_action_points

__all__ = [
    "GeneratedActionPoint",
    "build_prompt",
    "parse_reply",
    "generate_action_points",
]

logger = logging.getLogger("actionthreads.services.generation")

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")

PROMPT_TEMPLATE = """Analyze the meeting transcript below and list the 3-5 most important action points.

Transcript:
{transcript}{existing}

Return only a JSON array where each element is an object with a "title" field (string, max {max_len} characters).
Example: [{{"title": "Prepare the quarterly report"}}, {{"title": "Follow up with the client"}}]

Answer (JSON only):"""

EXISTING_TEMPLATE = """

Action points already recorded for this thread:
{titles}

Do NOT repeat any of the action points above; only return new ones."""


class GeneratedActionPoint(BaseModel):
    title: str


_reply_adapter = TypeAdapter(list[GeneratedActionPoint])


def build_prompt(transcript: str, existing_titles: list[str]) -> str:
    existing = ""
    if existing_titles:
        existing = EXISTING_TEMPLATE.format(titles="\n".join(f"- {t}" for t in existing_titles))
    return PROMPT_TEMPLATE.format(
        transcript=transcript, existing=existing, max_len=ACTION_POINT_TITLE_MAX_LENGTH
    )


def parse_reply(reply: str) -> list[str]:
    """Extract cleaned titles from a summarizer reply.

    Titles are trimmed and cut to the column limit; blank ones are dropped.
    Raises ``ActionPointGenerationError`` when the reply holds no JSON array
    of objects with a string ``title``.
    """
    match = _JSON_ARRAY.search(reply or "")
    if match is None:
        raise ActionPointGenerationError("Failed to extract JSON from the summarizer response")
    try:
        items = _reply_adapter.validate_python(json.loads(match.group(0)))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ActionPointGenerationError("The summarizer response is not a list of action points") from exc
    titles: list[str] = []
    for item in items:
        title = item.title.strip()[:ACTION_POINT_TITLE_MAX_LENGTH].strip()
        if title:
            titles.append(title)
    return titles


async def generate_action_points(
    session: AsyncSession,
    *,
    user_id: uuid.UUID,
    thread_id: uuid.UUID,
    content: str,
    summarizer: Summarizer,
) -> list[ActionPoint]:
    """Ask the summarizer for action points and store the new ones as incomplete.

    Titles already present on the thread (compared case-insensitively) and
    repeats within the reply are skipped.
    """
    existing = await list_action_points(session, user_id=user_id, thread_id=thread_id)
    existing_titles = [ap.title for ap in reversed(existing)]
    prompt = build_prompt(content, existing_titles)

    try:
        reply = await summarizer.complete(prompt)
    except OpenAIError as exc:
        logger.warning(
            "generation.summarizer.failed",
            extra={"thread_id": thread_id, "error_type": exc.__class__.__name__},
        )
        raise ActionPointGenerationError("The summarizer request failed") from exc

    try:
        titles = parse_reply(reply)
    except ActionPointGenerationError:
        logger.warning(
            "generation.reply.unparseable",
            extra={"thread_id": thread_id, "raw_preview": (reply or "")[:200]},
        )
        raise

    seen = {t.casefold() for t in existing_titles}
    created: list[ActionPoint] = []
    for title in titles:
        key = title.casefold()
        if key in seen:
            continue
        seen.add(key)
        created.append(
            await create_action_point(session, user_id=user_id, thread_id=thread_id, title=title)
        )
    logger.info(
        "generation.completed",
        extra={"thread_id": thread_id, "proposed": len(titles), "created": len(created)},
    )
    return created
