# temu_seller/api/base_client.py
import threading
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Type
from temu_seller.api.client import TemuHTTPClient
from temu_seller.api.envelopes import E, recheck_error
from temu_seller.api.models import (
    LoginByCodeParams, LoginParams, LoginVerifyCodeParams, MallInfo, ObtainCodeParams,
    OrderPage, OrderQueryParams, PublicKey, UserInfo,
)
from temu_seller.utils.logging import logger


class BaseService:
    """Shared plumbing for endpoint services: one request, one envelope check."""

    def _post(
        self,
        http: TemuHTTPClient,
        path: str,
        envelope_cls: Type[E],
        body: Any = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> E:
        logger.debug(f"[{http.name}] POST {path}")
        response = http.post(path, body=body, cancel_event=cancel_event)
        return recheck_error(response, envelope_cls)


class SellerAuthClient(ABC):
    """Authentication operations against the Temu seller sites."""

    @abstractmethod
    def get_public_key(self, cancel_event: Optional[threading.Event] = None) -> PublicKey:
        """Fetch the RSA key for password encryption."""
        pass

    @abstractmethod
    def login(self, params: LoginParams, cancel_event: Optional[threading.Event] = None) -> int:
        """Log in and return the account id."""
        pass

    @abstractmethod
    def get_login_verify_code(self, params: LoginVerifyCodeParams, cancel_event: Optional[threading.Event] = None) -> bool:
        """Send the SMS login code."""
        pass

    @abstractmethod
    def obtain_code(self, params: ObtainCodeParams, cancel_event: Optional[threading.Event] = None) -> str:
        """Issue a one-time code for the redirect target."""
        pass

    @abstractmethod
    def login_seller_central(self, url: str, cancel_event: Optional[threading.Event] = None) -> str:
        """Open the Seller Central login URL and return the raw body."""
        pass

    @abstractmethod
    def login_by_code(self, params: LoginByCodeParams, cancel_event: Optional[threading.Event] = None) -> bool:
        """Exchange a code for a Seller Central session."""
        pass

    @abstractmethod
    def get_user_info(self, cancel_event: Optional[threading.Event] = None) -> UserInfo:
        """Fetch the Seller Central profile."""
        pass

    @abstractmethod
    def get_mall_info(self, cancel_event: Optional[threading.Event] = None) -> List[MallInfo]:
        """Fetch the stores of the first company."""
        pass


class OrderClient(ABC):
    """Order queries."""

    @abstractmethod
    def query(self, params: OrderQueryParams, cancel_event: Optional[threading.Event] = None) -> OrderPage:
        """Fetch one page of orders."""
        pass
