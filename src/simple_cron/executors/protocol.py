import asyncio
import inspect
from typing import Any, Awaitable, Callable, Union

TaskCallable = Callable[[], Union[Any, Awaitable[Any]]]


async def invoke_task(task: TaskCallable) -> Any:
    """
    Run a zero-argument task to completion.

    Coroutine functions are awaited on the event loop. Plain callables run in a
    worker thread so they cannot block the polling loop; if they return an
    awaitable, it is awaited as well. Failure is signalled by raising.
    """
    if inspect.iscoroutinefunction(task) or inspect.iscoroutinefunction(getattr(task, "__call__", None)):
        result = await task()
    else:
        result = await asyncio.to_thread(task)
    if inspect.isawaitable(result):
        result = await result
    return result
