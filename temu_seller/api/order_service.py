# temu_seller/api/order_service.py
import threading
from typing import Optional
from temu_seller.api.base_client import BaseService, OrderClient
from temu_seller.api.client import TemuHTTPClient
from temu_seller.api.envelopes import SellerCentralEnvelope
from temu_seller.api.models import Order, OrderPage, OrderQueryParams
from temu_seller.utils.logging import logger
from temu_seller.utils.pagination import parse_response_total

ORDER_QUERY_PATH = "/kiana/mms/robin/searchForSemiSupplier"


class BgOrderService(BaseService, OrderClient):
    """Order list for semi-managed malls on Seller Central."""

    def __init__(self, seller_central_http: TemuHTTPClient):
        self.seller_central_http = seller_central_http

    def query(self, params: OrderQueryParams, cancel_event: Optional[threading.Event] = None) -> OrderPage:
        """Fetch one page of orders.

        Args:
            params (OrderQueryParams): Page and filters.
            cancel_event (Optional[threading.Event]): Set it to abort the call.

        Returns:
            OrderPage: Orders plus paging info derived from the reported total.
        """
        params.validate()
        envelope = self._post(
            self.seller_central_http, ORDER_QUERY_PATH, SellerCentralEnvelope,
            body=params.to_payload(), cancel_event=cancel_event,
        )
        result = envelope.result or {}
        orders = [Order.from_dict(item) for item in result.get("pageItems") or []]
        total, total_pages, is_last_page = parse_response_total(
            params.page_number, params.page_size, int(result.get("totalItemNum") or 0)
        )
        logger.info(f"[seller-central] Page {params.page_number}/{total_pages}: {len(orders)} orders of {total}")
        return OrderPage(orders=orders, total=total, total_pages=total_pages, is_last_page=is_last_page)
