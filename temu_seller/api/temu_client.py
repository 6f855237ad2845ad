# temu_seller/api/temu_client.py
from typing import Callable, Optional
import requests
from temu_seller.api.auth_service import BgAuthService
from temu_seller.api.client import Signer, TemuHTTPClient
from temu_seller.api.order_service import BgOrderService
from temu_seller.config.settings import ClientConfig, Settings, settings as default_settings
from temu_seller.utils.logging import logger, set_debug


class TemuClient:
    """Entry point: both sub-system transports plus the endpoint services."""

    def __init__(
        self,
        config: ClientConfig,
        signer: Signer,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        """Initialize the client.

        Args:
            config (ClientConfig): Immutable transport configuration.
            signer (Signer): Computes the Anti-Content header per request.
            session_factory (Callable[[], requests.Session]): Builds one session
                per sub-system.
        """
        self.config = config
        if config.debug:
            set_debug(True)
        self.http = TemuHTTPClient(
            config, config.base_url, signer, name="kuajingmaihuo", session=session_factory()
        )
        self.seller_central_http = TemuHTTPClient(
            config, config.seller_central_base_url, signer, name="seller-central", session=session_factory()
        )
        self.auth = BgAuthService(self.http, self.seller_central_http)
        self.orders = BgOrderService(self.seller_central_http)
        logger.debug(f"Temu client ready: {config.base_url}, {config.seller_central_base_url}")

    @classmethod
    def from_settings(cls, signer: Signer, settings: Optional[Settings] = None) -> "TemuClient":
        return cls(ClientConfig.from_settings(settings or default_settings), signer)

    def close(self) -> None:
        self.http.close()
        self.seller_central_http.close()
