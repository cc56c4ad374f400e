"""Deliver records to a caller-supplied handler."""
import asyncio
import inspect
from typing import Any, Awaitable, Callable, Union

from convlog.utils.schemas import Record

Handler = Callable[[Record], Union[Awaitable[Any], Any]]


class SinkAdapter:
    """Calls `handler` once per record.

    Sequential: an awaitable returned by the handler is awaited before the
    next record goes out, so delivery is strictly one at a time and in order.

    Concurrent: the handler is invoked in emission order but its awaitable is
    only scheduled; completion order is up to the handler. Scheduled tasks
    are kept in `pending` for callers that want to gather them.

    Handler exceptions are not caught here.
    """

    def __init__(self, handler: Handler, sequential: bool = True):
        self.handler = handler
        self.sequential = sequential
        self.delivered = 0
        self.pending: list[asyncio.Future] = []

    async def deliver(self, record: Record) -> None:
        self.delivered += 1
        result = self.handler(record)
        if not inspect.isawaitable(result):
            return
        if self.sequential:
            await result
        else:
            self.pending.append(asyncio.ensure_future(result))
