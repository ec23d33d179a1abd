"""Session boundary to the remote automation server.

The rest of the package only needs ``Session.call(endpoint_name, params)``.
HttpSession implements it over httpx and turns W3C error responses into the
classified exceptions the wait engine understands.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import httpx

from ..base_exceptions import AppiumVisionException
from ..config import ClientSettings, get_settings
from ..exceptions import (
    InvalidArgumentError,
    MalformedResponseError,
    RemoteCommandError,
    RemoteTimeoutError,
    SessionLostError,
    StaleElementError,
    TransientNotFoundError,
)
from ..logging import get_logger
from .endpoints import ENDPOINTS, Endpoint

logger = get_logger(__name__)


class Session(ABC):
    """A live remote session."""

    @abstractmethod
    def call(self, endpoint_name: str, params: Mapping[str, Any] | None = None) -> Any:
        """Issue one remote command and return its decoded value.

        Raises:
            AppiumVisionException: A classified failure
        """

    def close(self) -> None:
        """Release the session. The default does nothing."""


def classify_error(
    error: str, message: str, endpoint: str | None = None, status_code: int | None = None
) -> AppiumVisionException:
    """Map a W3C error string to an exception instance."""
    if error == "no such element":
        return TransientNotFoundError(message, endpoint=endpoint)
    if error == "stale element reference":
        return StaleElementError(reason=message, endpoint=endpoint)
    if error == "invalid argument":
        return InvalidArgumentError(message, endpoint=endpoint)
    if error in ("timeout", "script timeout"):
        return RemoteTimeoutError(message, endpoint=endpoint)
    if error == "invalid session id":
        return SessionLostError(message, endpoint=endpoint)
    return RemoteCommandError(error, message, endpoint=endpoint, status_code=status_code)


def _decode_response(response: httpx.Response, endpoint_name: str) -> Any:
    try:
        payload = response.json()
    except ValueError as e:
        raise MalformedResponseError(
            f"{endpoint_name} returned a non-JSON body (HTTP {response.status_code})",
            payload=response.text,
        ) from e

    if not isinstance(payload, dict) or "value" not in payload:
        raise MalformedResponseError(f"{endpoint_name} response has no 'value'", payload=payload)

    value = payload["value"]
    if response.status_code >= 400:
        if isinstance(value, dict) and "error" in value:
            raise classify_error(
                str(value["error"]),
                str(value.get("message", "")),
                endpoint=endpoint_name,
                status_code=response.status_code,
            )
        raise RemoteCommandError(
            "unknown error", str(value), endpoint=endpoint_name, status_code=response.status_code
        )
    return value


class HttpSession(Session):
    """Session speaking the W3C/Appium HTTP protocol through httpx."""

    def __init__(
        self,
        session_id: str,
        server_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
        settings: ClientSettings | None = None,
    ) -> None:
        """Attach to an existing remote session.

        Args:
            session_id: Remote session id
            server_url: Server base URL, from settings when omitted
            timeout: Per-call HTTP timeout, from settings when omitted
            client: Preconfigured httpx client (tests pass a MockTransport one)
            settings: Client settings
        """
        settings = settings or get_settings()
        self.session_id = session_id
        self.server_url = (server_url or settings.server_url).rstrip("/")
        self.timeout = settings.request_timeout if timeout is None else timeout
        self._client = client
        self._closed = False

    @classmethod
    def create(
        cls,
        capabilities: Mapping[str, Any],
        server_url: str | None = None,
        client: httpx.Client | None = None,
        settings: ClientSettings | None = None,
    ) -> "HttpSession":
        """Open a new remote session with W3C capabilities."""
        session = cls("", server_url=server_url, client=client, settings=settings)
        try:
            value = session.call(
                "new_session",
                {"capabilities": {"alwaysMatch": dict(capabilities), "firstMatch": [{}]}},
            )
            if not isinstance(value, dict) or "sessionId" not in value:
                raise MalformedResponseError("new session response has no sessionId", payload=value)
        except Exception:
            session.close()
            raise
        session.session_id = value["sessionId"]
        logger.info("session_created", session_id=session.session_id)
        return session

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(base_url=self.server_url, timeout=self.timeout)
        return self._client

    def endpoint(self, endpoint_name: str) -> Endpoint:
        try:
            return ENDPOINTS[endpoint_name]
        except KeyError:
            raise InvalidArgumentError(
                f"Unknown endpoint '{endpoint_name}'", endpoint=endpoint_name
            ) from None

    def call(self, endpoint_name: str, params: Mapping[str, Any] | None = None) -> Any:
        if self._closed:
            raise SessionLostError("Session is closed", endpoint=endpoint_name)

        endpoint = self.endpoint(endpoint_name)
        body = dict(params or {})
        missing = [name for name in endpoint.path_params if name not in body]
        if missing:
            raise InvalidArgumentError(
                f"{endpoint_name} needs {', '.join(missing)}", endpoint=endpoint_name, missing=missing
            )
        path_args = {name: str(body.pop(name)) for name in endpoint.path_params}
        url = endpoint.url_for(self.session_id, **path_args)
        if endpoint.method != "POST":
            body = None

        logger.debug("remote_call", endpoint=endpoint_name, method=endpoint.method, path=url)
        try:
            response = self.client.request(endpoint.method, url, json=body)
        except httpx.TimeoutException as e:
            raise RemoteTimeoutError(f"{endpoint_name} timed out: {e}", endpoint=endpoint_name) from e
        except httpx.RequestError as e:
            raise SessionLostError(f"{endpoint_name} failed: {e}", endpoint=endpoint_name) from e

        return _decode_response(response, endpoint_name)

    def close(self) -> None:
        """Delete the remote session and close the HTTP client."""
        if self._closed:
            return
        try:
            if self.session_id:
                self.call("delete_session")
        finally:
            self._closed = True
            if self._client:
                self._client.close()
                self._client = None
