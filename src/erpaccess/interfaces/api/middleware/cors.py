"""CORS middleware for the dashboard origins."""

import falcon.asgi

ANY_ORIGIN = "*"
ALLOWED_METHODS = "GET, POST, PATCH, OPTIONS"
ALLOWED_HEADERS = "Authorization, Content-Type"


class CORSMiddleware:
    """Echoes allowed origins back; requests from other origins get no CORS headers.

    "*" in origins allows any origin. Preflight requests are answered here and
    never reach a resource.
    """

    def __init__(self, origins: list[str], max_age: int = 86400) -> None:
        self._allow_any = ANY_ORIGIN in origins
        self._origins = frozenset(o for o in origins if o != ANY_ORIGIN)
        self._max_age = str(max_age)

    def allowed_origin(self, origin: str | None) -> str | None:
        if not origin:
            return None
        if self._allow_any or origin in self._origins:
            return origin
        return None

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        if req.method != "OPTIONS" or not req.get_header("Access-Control-Request-Method"):
            return
        resp.status = falcon.HTTP_204
        resp.complete = True
        if self.allowed_origin(req.get_header("Origin")):
            resp.set_header("Access-Control-Allow-Methods", ALLOWED_METHODS)
            resp.set_header("Access-Control-Allow-Headers", ALLOWED_HEADERS)
            resp.set_header("Access-Control-Max-Age", self._max_age)

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        resp.append_header("Vary", "Origin")
        origin = self.allowed_origin(req.get_header("Origin"))
        if origin:
            resp.set_header("Access-Control-Allow-Origin", origin)
