"""
Development reverse proxy for the FMC REST API.

Requests under the local prefix (default /fmc) are forwarded to the FMC origin
with the prefix stripped, TLS verification on and the Host header rewritten to
the upstream host. Status, headers and body are relayed untouched.
"""
import logging
from typing import Dict, Mapping, Optional
from urllib.parse import urlsplit

import requests
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from config.config import FMC_BASE_URL, FMC_PROXY_PREFIX, FMC_PROXY_HOST, FMC_PROXY_PORT, FMC_TIMEOUT
from config.logging_config import setup_logging

# -------------------- Logging --------------------
setup_logging()
logger = logging.getLogger("fmc_explorer.dev_proxy")

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

# Never forwarded; requests decodes the body so length/encoding are recomputed
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
    "content-length",
    "content-encoding",
}


def rewrite_path(path: str, prefix: str) -> str:
    """Strip the local prefix from a request path. Paths outside the prefix are returned unchanged."""
    prefix = "/" + prefix.strip("/")
    if path == prefix:
        return "/"
    if path.startswith(prefix + "/"):
        return path[len(prefix):]
    return path


def upstream_headers(headers: Mapping[str, str], upstream_url: str) -> Dict[str, str]:
    """Copy the client headers for the upstream request, pointing Host (and Origin) at the upstream."""
    parts = urlsplit(upstream_url)
    forwarded = {k: v for k, v in headers.items() if k.lower() not in HOP_BY_HOP_HEADERS and k.lower() != "host"}
    forwarded["Host"] = parts.netloc
    for key in list(forwarded):
        if key.lower() == "origin":
            forwarded[key] = f"{parts.scheme}://{parts.netloc}"
    return forwarded


def _response_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    return {k: v for k, v in headers.items() if k.lower() not in HOP_BY_HOP_HEADERS}


def create_app(
    upstream_url: str = FMC_BASE_URL,
    prefix: str = FMC_PROXY_PREFIX,
    verify_ssl: bool = True,
    session: Optional[requests.Session] = None,
) -> FastAPI:
    """
    Build the proxy application.

    Args:
        upstream_url: FMC origin requests are forwarded to
        prefix: Local path prefix that is stripped before forwarding
        verify_ssl: Verify the upstream TLS certificate
        session: requests session used for upstream calls

    Returns:
        FastAPI app with a single catch-all route under the prefix
    """
    upstream_url = upstream_url.rstrip("/")
    prefix = "/" + prefix.strip("/")

    app = FastAPI(title="FMC dev proxy")
    app.state.upstream_session = session or requests.Session()

    @app.api_route(prefix, methods=PROXY_METHODS)
    @app.api_route(prefix + "/{path:path}", methods=PROXY_METHODS)
    async def proxy(request: Request):
        target = f"{upstream_url}{rewrite_path(request.url.path, prefix)}"
        body = await request.body()
        logger.info("Proxy %s %s -> %s", request.method, request.url.path, target)

        try:
            upstream = await run_in_threadpool(
                request.app.state.upstream_session.request,
                request.method,
                target,
                params=list(request.query_params.multi_items()),
                headers=upstream_headers(request.headers, upstream_url),
                data=body or None,
                verify=verify_ssl,
                allow_redirects=False,
                timeout=FMC_TIMEOUT,
            )
        except requests.RequestException as err:
            logger.error("Upstream request to %s failed: %s", target, err)
            return JSONResponse({"detail": f"Bad Gateway: {err}"}, status_code=502)

        logger.debug("Upstream status: %s", upstream.status_code)
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers=_response_headers(upstream.headers),
        )

    return app


# -------------------- App --------------------
app = create_app()

# -------------------- Main --------------------
if __name__ == "__main__":
    uvicorn.run("dev_proxy.main:app", host=FMC_PROXY_HOST, port=FMC_PROXY_PORT, reload=True)
