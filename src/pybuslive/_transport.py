"""HTTP transport for the bus backend."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pybuslive._constants import USER_AGENT
from pybuslive.config import BusLiveConfig
from pybuslive.exceptions import BusLiveTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    Cancelling the awaiting task must abort the request.
    """

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        ...


class HttpTransport:
    """JSON-over-HTTP transport on top of an aiohttp session.

    Cancellation of the calling task propagates into aiohttp, which
    closes the underlying connection instead of letting the request run
    to completion.
    """

    def __init__(self, config: BusLiveConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = (
            aiohttp.ClientTimeout(total=config.request_timeout) if config.request_timeout is not None else None
        )

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        """GET ``endpoint`` and return the decoded JSON body.

        Raises
        ------
        BusLiveTransportError
            On network failure, a non-200 status, or a body that cannot be
            decoded or is not JSON.
        """
        url = f"{self._config.base_url}{endpoint}"
        headers = {"accept": "application/json", "user-agent": USER_AGENT}
        kwargs: dict[str, Any] = {"params": dict(params) if params else None, "headers": headers}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        _logger.debug("GET %s params=%s", url, params)

        try:
            async with self._http.get(url, **kwargs) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise BusLiveTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except BusLiveTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise BusLiveTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except UnicodeDecodeError as exc:
            raise BusLiveTransportError(
                f"Undecodable body from {endpoint}: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise BusLiveTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc
