import asyncio
from typing import Awaitable, Callable, Iterable, List, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def gather_ordered(func: Callable[[T], Awaitable[R]], items: Iterable[T]) -> List[R]:
    """
    Runs func over every item concurrently and waits for all of them.
    Results are returned in input order, not completion order.
    """
    return list(await asyncio.gather(*(func(item) for item in items)))
