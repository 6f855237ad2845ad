# temu_seller/api/client.py
import json
import logging
import threading
from typing import Any, Callable, Optional
from urllib.parse import urljoin, urlparse
import requests
from tenacity import (
    RetryCallState,
    Retrying,
    retry_base,
    stop_after_attempt,
    stop_when_event_set,
    wait_exponential,
)
from temu_seller.api.envelopes import decode_json_object, is_transient_failure
from temu_seller.api.exceptions import RequestCancelled, SignatureError
from temu_seller.config.settings import ClientConfig
from temu_seller.utils.logging import logger

# Computes the Anti-Content header from the serialized body (None when bodiless).
Signer = Callable[[Optional[bytes]], str]

ANTI_CONTENT_HEADER = "Anti-Content"
LOGIN_REDIRECT_STATUS = 302


class _Exchange:
    """One logical call: the immutable payload and the request for the next send."""

    def __init__(self, method: str, url: str, body: Optional[bytes]):
        self.method = method
        self.url = url
        self.body = body
        self.pending: Optional[requests.PreparedRequest] = None


class retry_if_transient(retry_base):
    """Retry on 429 or SYSTEM_EXCEPTION, re-signing a fresh request first."""

    def __init__(self, client: "TemuHTTPClient", exchange: _Exchange):
        self.client = client
        self.exchange = exchange

    def __call__(self, retry_state: RetryCallState) -> bool:
        if retry_state.outcome is None or retry_state.outcome.failed:
            return False
        response = retry_state.outcome.result()
        if not self.client.is_retryable(response):
            return False
        if retry_state.attempt_number > self.client.config.retry_count:
            # Out of attempts; the stop condition hands back this response.
            return True
        try:
            self.exchange.pending = self.client.prepare(self.exchange)
        except SignatureError as e:
            logger.error(f"[{self.client.name}] Failed to refresh Anti-Content, giving up retry: {e}")
            return False
        logger.warning(f"[{self.client.name}] Retrying request, URL: {self.exchange.url}")
        return True


class TemuHTTPClient:
    """Shared transport for one Temu sub-system.

    Holds only read-only configuration, so a single instance can serve
    concurrent callers. Every send gets its own prepared request and its own
    Anti-Content header.
    """

    def __init__(
        self,
        config: ClientConfig,
        base_url: str,
        signer: Signer,
        name: str = "kuajingmaihuo",
        session: Optional[requests.Session] = None,
    ):
        """Initialize the HTTP client.

        Args:
            config (ClientConfig): Timeout, TLS, proxy, headers and retry settings.
            base_url (str): Root URL relative paths are resolved against.
            signer (Signer): Computes the Anti-Content header value.
            name (str): Sub-system label used in log messages.
            session (Optional[requests.Session]): Session to send through.
        """
        self.config = config
        self.base_url = base_url.rstrip("/") + "/"
        self.signer = signer
        self.name = name
        self.session = session or requests.Session()
        self.session.headers.update(config.headers)
        self.session.verify = config.verify_ssl
        if config.proxy:
            self.session.proxies.update({"http": config.proxy, "https": config.proxy})

    def url_for(self, path: str) -> str:
        if urlparse(path).scheme in ("http", "https"):
            return path
        return urljoin(self.base_url, path.lstrip("/"))

    def is_retryable(self, response: requests.Response) -> bool:
        if response.status_code == 429:
            return True
        return is_transient_failure(decode_json_object(response))

    def prepare(self, exchange: _Exchange) -> requests.PreparedRequest:
        """Build a new signed request for ``exchange``.

        Raises:
            SignatureError: If the signer fails.
        """
        try:
            anti_content = self.signer(exchange.body)
        except Exception as e:
            raise SignatureError(f"Anti-Content computation failed: {e}") from e
        request = requests.Request(
            exchange.method,
            exchange.url,
            data=exchange.body,
            headers={ANTI_CONTENT_HEADER: anti_content},
        )
        return self.session.prepare_request(request)

    def _send(self, exchange: _Exchange, cancel_event: Optional[threading.Event]) -> requests.Response:
        if cancel_event is not None and cancel_event.is_set():
            raise RequestCancelled(f"Request to {exchange.url} cancelled")
        prepared = exchange.pending
        logger.debug("[%s] %s %s body=%r", self.name, prepared.method, prepared.url, exchange.body)
        response = self.session.send(prepared, timeout=self.config.timeout, allow_redirects=False)
        response = self._follow_redirects(response)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("[%s] HTTP %s %s: %s", self.name, response.status_code, response.url, response.text[:2000])
        return response

    def _follow_redirects(self, response: requests.Response) -> requests.Response:
        # A 302 is the platform's login redirect and goes back to the caller as-is.
        hops = 0
        while (
            response.is_redirect
            and response.status_code != LOGIN_REDIRECT_STATUS
            and response.next is not None
            and hops < self.session.max_redirects
        ):
            response = self.session.send(response.next, timeout=self.config.timeout, allow_redirects=False)
            hops += 1
        return response

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> requests.Response:
        """Send one logical request with signing and transient-error retries.

        Args:
            method (str): HTTP method.
            path (str): Path relative to the base URL, or an absolute URL.
            body (Any): JSON-serializable payload, or None.
            cancel_event (Optional[threading.Event]): Set it to abort the call.

        Returns:
            requests.Response: The final response. When retries run out this is
            the last transient answer.

        Raises:
            SignatureError: Signing the first attempt failed.
            RequestCancelled: ``cancel_event`` was set.
            requests.RequestException: Transport failure.
        """
        data = json.dumps(body).encode("utf-8") if body is not None else None
        exchange = _Exchange(method.upper(), self.url_for(path), data)
        exchange.pending = self.prepare(exchange)

        stop = stop_after_attempt(self.config.retry_count + 1)
        if cancel_event is not None:
            stop = stop | stop_when_event_set(cancel_event)

        retrying = Retrying(
            stop=stop,
            wait=wait_exponential(
                multiplier=self.config.retry_wait_time,
                min=self.config.retry_wait_time,
                max=self.config.retry_max_wait_time,
            ),
            retry=retry_if_transient(self, exchange),
            retry_error_callback=lambda state: self._after_retries(state, cancel_event),
            reraise=True,
        )
        return retrying(self._send, exchange, cancel_event)

    def _after_retries(self, retry_state: RetryCallState, cancel_event: Optional[threading.Event]) -> requests.Response:
        if cancel_event is not None and cancel_event.is_set():
            raise RequestCancelled(f"Request to {retry_state.args[0].url} cancelled")
        logger.warning(
            f"[{self.name}] Giving up after {retry_state.attempt_number} attempts, URL: {retry_state.args[0].url}"
        )
        return retry_state.outcome.result()

    def get(self, path: str, cancel_event: Optional[threading.Event] = None) -> requests.Response:
        return self.request("GET", path, cancel_event=cancel_event)

    def post(self, path: str, body: Any = None, cancel_event: Optional[threading.Event] = None) -> requests.Response:
        return self.request("POST", path, body=body, cancel_event=cancel_event)

    def close(self) -> None:
        self.session.close()
