"""
Transport handle construction.

The client never creates connections itself; it is handed an
``aiohttp.ClientSession``. :func:`create_session` builds one from a
:class:`~gqlclient.config.ClientConfig` for callers that do not bring their own.
"""

from __future__ import annotations

import logging
from typing import Optional

import aiohttp

from .config.models import ClientConfig

logger = logging.getLogger(__name__)


def create_session(config: Optional[ClientConfig] = None) -> aiohttp.ClientSession:
    """
    Create an HTTP session with connection pooling.

    Must be called from a coroutine: aiohttp binds the session to the
    running event loop.

    Args:
        config: Client configuration (defaults when omitted)

    Returns:
        A new session; the caller owns it and must close it
    """
    config = config or ClientConfig()

    connector = aiohttp.TCPConnector(
        limit=config.max_connections,
        ssl=config.verify_ssl,
    )

    timeout = aiohttp.ClientTimeout(
        total=config.timeout,
        connect=config.connect_timeout,
    )

    headers = {"User-Agent": config.user_agent}
    headers.update(config.headers)

    logger.debug(
        "Creating session (timeout=%.1fs, max_connections=%d, verify_ssl=%s)",
        config.timeout,
        config.max_connections,
        config.verify_ssl,
    )
    return aiohttp.ClientSession(
        timeout=timeout,
        connector=connector,
        headers=headers,
        raise_for_status=False,
    )
