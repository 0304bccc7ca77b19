# hospital/db/deps.py
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session: committed when the handler returns, rolled
    back when it raises.

    The manager lives on app.state, set up by the lifespan.
    """
    manager = getattr(request.app.state, "db_manager", None)

    if not manager:
        raise RuntimeError(
            "DbManager not found in app.state. Ensure lifespan is configured."
        )

    async with manager.session() as session:
        yield session


__all__ = ["get_db"]
