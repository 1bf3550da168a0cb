from fastapi import Request, Response
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from redis.exceptions import NoScriptError


async def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host


class GroupRateLimiter(RateLimiter):
    """
    RateLimiter with a single budget per client across every route it guards.

    The stock limiter keys on the route as well, which gives each route of a
    router its own budget.
    """

    def __init__(self, group: str, **kwargs):
        super().__init__(**kwargs)
        self.group = group

    def key_for(self, rate_key: str) -> str:
        return f"{FastAPILimiter.prefix}:{self.group}:{rate_key}"

    async def __call__(self, request: Request, response: Response):
        if not FastAPILimiter.redis:
            raise RuntimeError("FastAPILimiter.init must run at startup before rate limiting")

        identifier = self.identifier or client_ip
        callback = self.callback or FastAPILimiter.http_callback
        key = self.key_for(await identifier(request))
        try:
            pexpire = await self._check(key)
        except NoScriptError:
            FastAPILimiter.lua_sha = await FastAPILimiter.redis.script_load(FastAPILimiter.lua_script)
            pexpire = await self._check(key)
        if pexpire != 0:
            return await callback(request, response, pexpire)
