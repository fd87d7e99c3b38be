import logging
from typing import Dict, Optional, Tuple

import httpx

from ..core.config import config

logger = logging.getLogger(__name__)


def get_async_http_client(
    base_url: str = "",
    connect_timeout: float = None,
    read_timeout: float = None,
    verify: bool = True,
    headers: Optional[Dict[str, str]] = None,
    cert: Optional[Tuple[str, str]] = None,
) -> httpx.AsyncClient:
    """
    Returns a configured httpx.AsyncClient with:
    - Default timeouts (connect and read).
    - Standard User-Agent header, merged with any extra headers.
    - Optional client certificate (cert_file, key_file) for API server auth.
    """
    c_timeout = connect_timeout if connect_timeout is not None else config.DEFAULT_TIMEOUT_CONNECT
    r_timeout = read_timeout if read_timeout is not None else config.DEFAULT_TIMEOUT_READ

    timeout = httpx.Timeout(r_timeout, connect=c_timeout)

    merged_headers = {"User-Agent": config.USER_AGENT, "Accept": "application/json"}
    if headers:
        merged_headers.update(headers)

    if not verify:
        logger.debug("Creating HTTP client without TLS verification for %s", base_url or "<no base url>")

    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        headers=merged_headers,
        verify=verify,
        cert=cert,
        follow_redirects=True,
    )
