# follower_scout/server.py
"""
HTTP endpoint for the follower lookup.

``GET /api/followers?user=<name>[&debug=1]`` always answers 200 with a JSON
body whose ``followers`` is a number or null; internal failures degrade to
``followers: null`` instead of an error status.
"""
from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Optional

from aiohttp import web

from follower_scout.cache import ResultCache
from follower_scout.config import ScoutConfig
from follower_scout.fetcher import ProfileFetcher
from follower_scout.logger import logger, lookup_logger
from follower_scout.service import FollowerService, LookupStatus

CONFIG_KEY = web.AppKey("config", ScoutConfig)
SERVICE_KEY = web.AppKey("service", FollowerService)

API_PATHS = ("/api/followers", "/api/tiktok-followers")

_TRUTHY = ("1", "true")


@web.middleware
async def cors_middleware(request: web.Request, handler) -> web.StreamResponse:
    response = await handler(request)
    response.headers["Access-Control-Allow-Origin"] = request.app[CONFIG_KEY].server.cors_origin
    response.headers["Access-Control-Allow-Methods"] = "GET,OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


async def handle_preflight(_: web.Request) -> web.Response:
    return web.Response(status=204)


async def handle_followers(request: web.Request) -> web.Response:
    service = request.app[SERVICE_KEY]
    debug = request.query.get("debug", "").lower() in _TRUTHY
    identifier = request.query.get("user") or request.query.get("username")
    try:
        result = await service.lookup(identifier, debug=debug)
    except Exception as exc:
        lookup_logger(identifier).exception("Unexpected error during lookup")
        payload = {"followers": None, "status": LookupStatus.ERROR.value, "error": "internal"}
        if debug:
            payload["details"] = str(exc)
        return web.json_response(payload)
    return web.json_response(result.to_payload())


def create_app(config: ScoutConfig, *, service: Optional[FollowerService] = None) -> web.Application:
    """Build the aiohttp application.

    Without *service*, one cache and one fetcher session are created when the
    app starts and live until it shuts down.
    """
    app = web.Application(middlewares=[cors_middleware])
    app[CONFIG_KEY] = config

    if service is not None:
        app[SERVICE_KEY] = service
    else:

        async def _service_ctx(app: web.Application) -> AsyncIterator[None]:
            async with ProfileFetcher(config) as fetcher:
                app[SERVICE_KEY] = FollowerService(config, fetcher, ResultCache(config.cache_ttl))
                logger.info("Follower service ready (cache TTL %g s)", config.cache_ttl)
                yield

        app.cleanup_ctx.append(_service_ctx)

    for path in API_PATHS:
        app.router.add_get(path, handle_followers)
        app.router.add_route("OPTIONS", path, handle_preflight)
    return app


def run_server(config: ScoutConfig, host: Optional[str] = None, port: Optional[int] = None) -> None:
    host = host or config.server.host
    port = port or config.server.port
    logger.info("API available at http://%s:%d%s", host, port, API_PATHS[0])
    web.run_app(create_app(config), host=host, port=port, print=None)


__all__ = ["API_PATHS", "create_app", "run_server"]
