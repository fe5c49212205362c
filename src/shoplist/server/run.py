"""Helper for running the Shoplist ASGI application under uvicorn."""

from __future__ import annotations

import asyncio
import os
from typing import Optional

import uvicorn

APP_FACTORY = "shoplist.server.app:create_app"


async def _serve_with_duration(server: uvicorn.Server, duration: float) -> None:
    """Run the server and shut it down after the specified duration."""

    async def _shutdown() -> None:
        await asyncio.sleep(duration)
        server.should_exit = True

    asyncio.create_task(_shutdown())
    await server.serve()


def _parse_duration(value: str | None) -> Optional[float]:
    if not value:
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid SHOPLIST_SERVER_DURATION '{value}': {exc}") from exc
    if parsed <= 0:
        raise SystemExit("SHOPLIST_SERVER_DURATION must be greater than 0 when provided.")
    return parsed


def serve(
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: Optional[bool] = None,
) -> None:
    """Run the API; arguments override the SHOPLIST_SERVER_* environment variables."""

    host = host or os.environ.get("SHOPLIST_SERVER_HOST", "127.0.0.1")
    port = port or int(os.environ.get("SHOPLIST_SERVER_PORT", "8000"))
    reload_enabled = reload if reload is not None else os.environ.get("RELOAD") == "1"
    duration = _parse_duration(os.environ.get("SHOPLIST_SERVER_DURATION"))

    if reload_enabled and duration is not None:
        raise SystemExit("Use RELOAD=0 when specifying SHOPLIST_SERVER_DURATION.")

    if reload_enabled:
        uvicorn.run(APP_FACTORY, host=host, port=port, reload=True, factory=True)
        return

    config = uvicorn.Config(APP_FACTORY, host=host, port=port, reload=False, factory=True)
    server = uvicorn.Server(config)

    if duration is not None:
        asyncio.run(_serve_with_duration(server, duration))
        return

    server.run()


def main() -> None:
    serve()


if __name__ == "__main__":
    main()
