from typing import Awaitable, Callable, TypeVar

import anyio
import structlog
from starlette.requests import Request

from shared.errors import ClientClosedRequestError

log = structlog.get_logger(__name__)

T = TypeVar("T")


async def run_until_disconnect(request: Request, concept_id: str, fn: Callable[[], Awaitable[T]]) -> T:
    """
    Await fn() while listening for the client going away.
    A disconnect cancels fn() and raises ClientClosedRequestError.
    """
    result: list[T] = []
    errors: list[Exception] = []
    disconnected = False

    async with anyio.create_task_group() as tg:

        async def listen_for_disconnect() -> None:
            nonlocal disconnected
            while True:
                message = await request.receive()
                if message["type"] == "http.disconnect":
                    disconnected = True
                    tg.cancel_scope.cancel()
                    return

        async def run() -> None:
            # Task groups wrap errors in ExceptionGroup; keep the original to re-raise below.
            try:
                result.append(await fn())
            except Exception as e:
                errors.append(e)
            tg.cancel_scope.cancel()

        tg.start_soon(listen_for_disconnect)
        tg.start_soon(run)

    if errors:
        raise errors[0]
    if disconnected and not result:
        log.info("client disconnected, lookup cancelled", concept_id=concept_id)
        raise ClientClosedRequestError(concept_id)
    return result[0]
