# tests/test_api.py
import json
import threading
import pytest
import requests
from unittest.mock import Mock, patch
from temu_seller.api.envelopes import KuajingmaihuoEnvelope, SellerCentralEnvelope, recheck_error
from temu_seller.api.exceptions import APIError, RequestCancelled, ValidationError
from temu_seller.api.models import (
    LoginByCodeParams, LoginParams, LoginVerifyCodeParams, ObtainCodeParams, OrderQueryParams,
)
from temu_seller.api.temu_client import TemuClient
from temu_seller.config.settings import ClientConfig, Settings
from temu_seller.utils.pagination import parse_response_total


def make_response(status_code=200, payload=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    return response


@pytest.fixture
def temu():
    config = ClientConfig(retry_wait_time=0, retry_max_wait_time=0)
    return TemuClient(config, signer=Mock(return_value="anti-content"))


# Pagination
def test_parse_response_total_first_page():
    assert parse_response_total(0, 20, 45) == (45, 3, False)

def test_parse_response_total_last_page():
    assert parse_response_total(3, 20, 45) == (45, 3, True)

def test_parse_response_total_exact_multiple_keeps_extra_page():
    assert parse_response_total(2, 20, 40) == (40, 3, False)

def test_parse_response_total_rejects_zero_page_size():
    with pytest.raises(ValueError):
        parse_response_total(1, 0, 10)


# Envelopes
def test_recheck_error_trims_message():
    response = make_response(payload={"success": False, "errorCode": 40001, "errorMsg": "  account locked \n"})
    with pytest.raises(APIError) as exc:
        recheck_error(response, KuajingmaihuoEnvelope)
    assert exc.value.message == "account locked"
    assert exc.value.error_code == 40001

def test_recheck_error_http_status_without_envelope():
    with pytest.raises(APIError, match="HTTP 502") as exc:
        recheck_error(make_response(502, b"bad gateway"), KuajingmaihuoEnvelope)
    assert exc.value.status_code == 502

def test_recheck_error_non_json_success_status():
    with pytest.raises(APIError, match=r"^unexpected response body \(HTTP 200\)$"):
        recheck_error(make_response(200, b"<html>maintenance</html>"), KuajingmaihuoEnvelope)

def test_envelope_shapes_are_not_cross_decoded():
    payload = {"success": False, "error_code": 1000, "error_msg": "not logged in"}
    assert SellerCentralEnvelope.from_payload(payload).message == "not logged in"
    assert KuajingmaihuoEnvelope.from_payload(payload).message == ""
    assert KuajingmaihuoEnvelope.from_payload(payload).error_code is None


# Validation
@pytest.mark.parametrize("params, field", [
    (LoginParams(login_name="", encrypt_password="secret"), "loginName"),
    (LoginParams(login_name="bob", encrypt_password=""), "encryptPassword"),
])
def test_login_validation_skips_network(temu, params, field):
    with patch.object(temu.http.session, "send") as send:
        with pytest.raises(ValidationError) as exc:
            temu.auth.login(params)
    assert exc.value.errors == [f"{field} is required"]
    send.assert_not_called()

def test_validation_reports_every_missing_field():
    with pytest.raises(ValidationError) as exc:
        LoginParams(login_name="", encrypt_password="").validate()
    assert exc.value.errors == ["loginName is required", "encryptPassword is required"]

def test_obtain_code_requires_redirect_url(temu):
    with patch.object(temu.http.session, "send") as send:
        with pytest.raises(ValidationError, match="redirectUrl is required"):
            temu.auth.obtain_code(ObtainCodeParams(redirect_url=""))
    send.assert_not_called()


# Auth service
def test_login_returns_account_id(temu):
    with patch.object(temu.http.session, "send", return_value=make_response(payload={"success": True, "result": {"accountId": 123}})) as send:
        account_id = temu.auth.login(LoginParams(login_name="bob", encrypt_password="c2VjcmV0"))
    assert account_id == 123
    body = json.loads(send.call_args.args[0].body)
    assert body == {"loginName": "bob", "encryptPassword": "c2VjcmV0", "keyVersion": "1", "verifyCode": None}
    assert send.call_args.args[0].url == "https://seller.kuajingmaihuo.com/bg/quiet/api/mms/login"

def test_login_failure_raises_api_error(temu):
    payload = {"success": False, "errorCode": 40001, "errorMsg": " 密码错误 "}
    with patch.object(temu.http.session, "send", return_value=make_response(payload=payload)) as send:
        with pytest.raises(APIError, match="^密码错误$"):
            temu.auth.login(LoginParams(login_name="bob", encrypt_password="x"))
    assert send.call_count == 1

def test_login_rate_limited_until_exhausted(temu):
    with patch.object(temu.http.session, "send", side_effect=[make_response(429, {}) for _ in range(4)]) as send:
        with pytest.raises(APIError) as exc:
            temu.auth.login(LoginParams(login_name="bob", encrypt_password="x"))
    assert send.call_count == 4
    assert exc.value.status_code == 429

def test_get_public_key(temu):
    payload = {"success": True, "result": {"publicKey": "MIIB", "version": 2}}
    with patch.object(temu.http.session, "send", return_value=make_response(payload=payload)):
        key = temu.auth.get_public_key()
    assert key.public_key == "MIIB"
    assert key.version == "2"

def test_get_public_key_honours_cancellation(temu):
    event = threading.Event()
    event.set()
    with patch.object(temu.http.session, "send") as send:
        with pytest.raises(RequestCancelled):
            temu.auth.get_public_key(cancel_event=event)
    send.assert_not_called()

def test_get_login_verify_code(temu):
    with patch.object(temu.http.session, "send", return_value=make_response(payload={"success": True})):
        assert temu.auth.get_login_verify_code(LoginVerifyCodeParams(mobile="13800000000")) is True

def test_obtain_code(temu):
    payload = {"success": True, "result": {"code": "abc123"}}
    with patch.object(temu.http.session, "send", return_value=make_response(payload=payload)):
        assert temu.auth.obtain_code(ObtainCodeParams(redirect_url="https://agentseller.temu.com/main")) == "abc123"

def test_login_by_code_uses_seller_central(temu):
    with patch.object(temu.seller_central_http.session, "send", return_value=make_response(payload={"success": True, "result": {}})) as send:
        assert temu.auth.login_by_code(LoginByCodeParams(code="abc123", target_mall_id=634418)) is True
    prepared = send.call_args.args[0]
    assert prepared.url == "https://agentseller.temu.com/api/seller/auth/loginByCode"
    assert json.loads(prepared.body) == {"code": "abc123", "confirm": False, "targetMallId": 634418}

def test_login_by_code_error_uses_seller_central_shape(temu):
    payload = {"success": False, "error_code": 40002, "error_msg": "code expired"}
    with patch.object(temu.seller_central_http.session, "send", return_value=make_response(payload=payload)):
        with pytest.raises(APIError, match="code expired"):
            temu.auth.login_by_code(LoginByCodeParams(code="abc123"))

def test_get_user_info(temu):
    payload = {"success": True, "result": {
        "accountId": 7, "accountType": 1,
        "mallList": [{"mallId": 634418, "mallName": "Shop", "isSemiManagedMall": True}],
    }}
    with patch.object(temu.seller_central_http.session, "send", return_value=make_response(payload=payload)):
        info = temu.auth.get_user_info()
    assert info.account_id == 7
    assert info.mall_list[0].mall_id == 634418
    assert info.mall_list[0].is_semi_managed_mall is True

def test_get_mall_info(temu):
    payload = {"success": True, "result": {"companyList": [
        {"malInfoList": [{"mallId": 1, "mallName": "A"}, {"mallId": 2, "mallName": "B"}]},
    ]}}
    with patch.object(temu.http.session, "send", return_value=make_response(payload=payload)):
        malls = temu.auth.get_mall_info()
    assert [m.mall_name for m in malls] == ["A", "B"]

def test_get_mall_info_without_company(temu):
    with patch.object(temu.http.session, "send", return_value=make_response(payload={"success": True, "result": {"companyList": []}})):
        assert temu.auth.get_mall_info() == []

def test_login_seller_central_returns_raw_body(temu):
    with patch.object(temu.http.session, "send", return_value=make_response(payload=b"<html>ok</html>")):
        assert temu.auth.login_seller_central("https://agentseller.temu.com/main/authentication") == "<html>ok</html>"


# Order service
def test_order_query_pages(temu):
    payload = {"success": True, "result": {"totalItemNum": 45, "pageItems": [
        {"parentOrderMap": {"parentOrderSn": "PO-1", "parentOrderStatus": 2, "regionName": "US"}, "orderList": [{}, {}]},
    ]}}
    with patch.object(temu.seller_central_http.session, "send", return_value=make_response(payload=payload)) as send:
        page = temu.orders.query(OrderQueryParams(page_number=3, page_size=20))
    assert page.total == 45
    assert page.total_pages == 3
    assert page.is_last_page is True
    assert page.orders[0].parent_order_sn == "PO-1"
    assert page.orders[0].goods_count == 2
    assert json.loads(send.call_args.args[0].body)["pageNumber"] == 3

def test_order_query_requires_page_size(temu):
    with pytest.raises(ValidationError):
        temu.orders.query(OrderQueryParams(page_size=0))


# Config
def test_client_config_from_settings():
    settings = Settings()
    settings.TEMU_PROXY = ""
    settings.TEMU_USER_AGENT = "ua"
    config = ClientConfig.from_settings(settings)
    assert config.proxy is None
    assert config.headers["User-Agent"] == "ua"

def test_settings_validate_rejects_bad_timeout():
    settings = Settings()
    settings.TEMU_TIMEOUT = 0
    with pytest.raises(ValueError, match="TEMU_TIMEOUT"):
        settings.validate()
