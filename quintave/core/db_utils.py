"""
Database utilities for connection error handling on read paths
"""
import functools
import logging
from typing import Callable, Any, TypeVar, cast, Awaitable

logger = logging.getLogger(__name__)

# Define a type variable for the return type of the decorated function
T = TypeVar('T')

CONNECTION_ERROR_NAMES = (
    "ConnectionError",
    "OperationalError",
    "InterfaceError",
    "ConnectionDoesNotExistError",
    "ConnectionRefusedError",
)


def is_connection_error(exc: BaseException) -> bool:
    """Match on the exception type name so asyncpg, aiosqlite and SQLAlchemy wrappers all count"""
    error_name = type(exc).__name__
    return any(err in error_name for err in CONNECTION_ERROR_NAMES)


def return_default_on_db_error(
    default_factory: Callable[[], Any] = list,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator for read operations: when the database is unreachable, log it
    and return an empty/default result instead of failing the request.

    Writes are never wrapped with this; their errors propagate to the caller.

    Args:
        default_factory: Builds the value returned on a connection error

    Returns:
        Decorated function
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                if not is_connection_error(e):
                    # Not a connection error, re-raise immediately
                    raise
                logger.warning(
                    f"[Database] {func.__name__} unavailable, returning default result: {str(e)}"
                )
                return cast(T, default_factory())

        return cast(Callable[..., Awaitable[T]], wrapper)

    return decorator
