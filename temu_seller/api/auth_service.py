# temu_seller/api/auth_service.py
import threading
from typing import List, Optional
from temu_seller.api.base_client import BaseService, SellerAuthClient
from temu_seller.api.client import TemuHTTPClient
from temu_seller.api.envelopes import KuajingmaihuoEnvelope, SellerCentralEnvelope
from temu_seller.api.models import (
    LoginByCodeParams, LoginParams, LoginResult, LoginVerifyCodeParams, MallInfo,
    ObtainCodeParams, PublicKey, UserInfo,
)
from temu_seller.utils.logging import logger


class BgAuthService(BaseService, SellerAuthClient):
    """Login flow across the Kuajingmaihuo portal and Seller Central."""

    def __init__(self, http: TemuHTTPClient, seller_central_http: TemuHTTPClient):
        self.http = http
        self.seller_central_http = seller_central_http

    def get_public_key(self, cancel_event: Optional[threading.Event] = None) -> PublicKey:
        envelope = self._post(
            self.http, "/bg/quiet/api/mms/key/login", KuajingmaihuoEnvelope, cancel_event=cancel_event,
        )
        return PublicKey.from_dict(envelope.result or {})

    def login(self, params: LoginParams, cancel_event: Optional[threading.Event] = None) -> int:
        """Log in with a login name and encrypted password.

        Args:
            params (LoginParams): Credentials; ``encrypt_password`` must already
                be encrypted with the key from ``get_public_key``.
            cancel_event (Optional[threading.Event]): Set it to abort the call.

        Returns:
            int: The account id.

        Raises:
            ValidationError: Login name or password is empty.
            APIError: The portal rejected the login.
        """
        params.validate()
        envelope = self._post(
            self.http, "/bg/quiet/api/mms/login", KuajingmaihuoEnvelope,
            body=params.to_payload(), cancel_event=cancel_event,
        )
        result = LoginResult.from_dict(envelope.result or {})
        logger.info(f"[kuajingmaihuo] Logged in as account {result.account_id}")
        return result.account_id

    def get_login_verify_code(self, params: LoginVerifyCodeParams, cancel_event: Optional[threading.Event] = None) -> bool:
        params.validate()
        self._post(
            self.http, "/bg/quiet/api/mms/loginVerifyCode", KuajingmaihuoEnvelope,
            body=params.to_payload(), cancel_event=cancel_event,
        )
        return True

    def obtain_code(self, params: ObtainCodeParams, cancel_event: Optional[threading.Event] = None) -> str:
        params.validate()
        envelope = self._post(
            self.http, "/bg/quiet/api/auth/obtainCode", KuajingmaihuoEnvelope,
            body=params.to_payload(), cancel_event=cancel_event,
        )
        return (envelope.result or {}).get("code", "")

    def login_seller_central(self, url: str, cancel_event: Optional[threading.Event] = None) -> str:
        """Open a Seller Central login URL; the body comes back unparsed."""
        response = self.http.get(url, cancel_event=cancel_event)
        return response.text

    def login_by_code(self, params: LoginByCodeParams, cancel_event: Optional[threading.Event] = None) -> bool:
        params.validate()
        self._post(
            self.seller_central_http, "/api/seller/auth/loginByCode", SellerCentralEnvelope,
            body=params.to_payload(), cancel_event=cancel_event,
        )
        logger.info(f"[seller-central] Logged in to mall {params.target_mall_id}")
        return True

    def get_user_info(self, cancel_event: Optional[threading.Event] = None) -> UserInfo:
        envelope = self._post(
            self.seller_central_http, "/api/seller/auth/userInfo", SellerCentralEnvelope,
            body={}, cancel_event=cancel_event,
        )
        return UserInfo.from_dict(envelope.result or {})

    def get_mall_info(self, cancel_event: Optional[threading.Event] = None) -> List[MallInfo]:
        envelope = self._post(
            self.http, "/bg/quiet/api/mms/userInfo", KuajingmaihuoEnvelope,
            body={}, cancel_event=cancel_event,
        )
        companies = (envelope.result or {}).get("companyList") or []
        if not companies:
            logger.warning("[kuajingmaihuo] No company in user info, returning no malls")
            return []
        return [MallInfo.from_dict(m) for m in companies[0].get("malInfoList") or []]
