"""CORS middleware answering browser pre-flights with 204 No Content."""

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

_BODY_HEADERS = {"content-length", "content-type"}


class PreflightNoContentCORSMiddleware(CORSMiddleware):
    """Starlette's CORS middleware with empty 204 pre-flight responses.

    Every pre-flight gets a 204, including ones Starlette would refuse with
    a 400 (unlisted origin, method or header). The CORS headers are kept, so
    the browser still makes the final decision.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers=request_headers)
        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in _BODY_HEADERS
        }
        return Response(status_code=204, headers=headers)
