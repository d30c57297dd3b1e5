"""
pump.py — Host-side helper: drive many messages through one ReadFileMediator.

This is not part of the mediation itself. A routing engine calls mediate()
once per message; this module serves async hosts and batch tools that want
to push a whole set of contexts through with an aiostream pipeline.

mediate() is blocking (file and network I/O), so each invocation runs in a
worker thread. task_limit caps how many run at once. Per-message behaviour is
identical to calling mediate() directly; the mediator keeps no state between
messages, so concurrent invocations do not interact.

Usage:
    mediator = ReadFileMediator(ConfigLoader.load("config/read_file.yaml"))
    done = await mediate_all(contexts, mediator, task_limit=8)
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterable, Iterable, List

from aiostream import pipe, stream

from filemediator.mediator import ReadFileMediator
from filemediator.message_context import MessageContext


def build_pipeline(
    source: Iterable[MessageContext] | AsyncIterable[MessageContext],
    mediator: ReadFileMediator,
    task_limit: int = 4,
):
    """Compose source → mediate (threaded, bounded) as a stream."""

    async def mediate_in_thread(context: MessageContext) -> MessageContext:
        await asyncio.to_thread(mediator.mediate, context)
        return context

    return (
        stream.iterate(source)
        | pipe.map(mediate_in_thread, task_limit=task_limit)
    )


async def mediate_all(
    source: Iterable[MessageContext] | AsyncIterable[MessageContext],
    mediator: ReadFileMediator,
    task_limit: int = 4,
) -> List[MessageContext]:
    """Mediate every context from source; returns them once all are done."""
    pipeline = build_pipeline(source, mediator, task_limit=task_limit)

    results: List[MessageContext] = []
    async with pipeline.stream() as streamer:
        async for context in streamer:
            results.append(context)
    return results
