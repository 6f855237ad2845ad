# temu_seller/api/models.py
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from temu_seller.api.exceptions import ValidationError


def _require(fields: Dict[str, Any]) -> None:
    """Raise ValidationError naming every empty field."""
    errors = [f"{name} is required" for name, value in fields.items() if value in (None, "", 0)]
    if errors:
        raise ValidationError(errors)


# Request parameters

@dataclass(frozen=True)
class LoginParams:
    """Account login with an RSA-encrypted password."""
    login_name: str
    encrypt_password: str
    key_version: str = "1"
    verify_code: Optional[str] = None

    def validate(self) -> None:
        _require({"loginName": self.login_name, "encryptPassword": self.encrypt_password})

    def to_payload(self) -> Dict[str, Any]:
        return {
            "loginName": self.login_name,
            "encryptPassword": self.encrypt_password,
            "keyVersion": self.key_version,
            "verifyCode": self.verify_code,
        }


@dataclass(frozen=True)
class ObtainCodeParams:
    """Request a one-time code for entering another Temu site."""
    redirect_url: str

    def validate(self) -> None:
        _require({"redirectUrl": self.redirect_url})

    def to_payload(self) -> Dict[str, Any]:
        return {"redirectUrl": self.redirect_url}


@dataclass(frozen=True)
class LoginByCodeParams:
    code: str
    target_mall_id: int = 0
    confirm: bool = False

    def validate(self) -> None:
        _require({"code": self.code})

    def to_payload(self) -> Dict[str, Any]:
        return {"code": self.code, "confirm": self.confirm, "targetMallId": self.target_mall_id}


@dataclass(frozen=True)
class LoginVerifyCodeParams:
    mobile: str

    def validate(self) -> None:
        _require({"mobile": self.mobile})

    def to_payload(self) -> Dict[str, Any]:
        return {"mobile": self.mobile}


@dataclass(frozen=True)
class OrderQueryParams:
    """Filters for the semi-managed order list."""
    page_number: int = 1
    page_size: int = 20
    parent_order_sn_list: List[str] = field(default_factory=list)
    fulfillment_type: int = 0
    create_after: Optional[int] = None
    create_before: Optional[int] = None

    def validate(self) -> None:
        _require({"pageSize": self.page_size})

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "pageNumber": self.page_number,
            "pageSize": self.page_size,
            "fulfillmentMode": self.fulfillment_type,
        }
        if self.parent_order_sn_list:
            payload["parentOrderSnList"] = list(self.parent_order_sn_list)
        if self.create_after is not None:
            payload["parentOrderTimeStart"] = self.create_after
        if self.create_before is not None:
            payload["parentOrderTimeEnd"] = self.create_before
        return payload


# Entities

@dataclass
class PublicKey:
    """RSA key used to encrypt the login password."""
    public_key: str
    version: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PublicKey":
        return cls(public_key=data.get("publicKey", ""), version=str(data.get("version", "")))


@dataclass
class LoginResult:
    account_id: int
    mask_mobile: str = ""
    verify_auth_token: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoginResult":
        return cls(
            account_id=int(data.get("accountId") or 0),
            mask_mobile=data.get("maskMobile", ""),
            verify_auth_token=data.get("verifyAuthToken", ""),
        )


@dataclass
class Mall:
    """Store entry in the Seller Central profile."""
    mall_id: int
    mall_name: str
    mall_status: int = 0
    is_semi_managed_mall: bool = False
    logo: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Mall":
        return cls(
            mall_id=int(data.get("mallId") or 0),
            mall_name=data.get("mallName", ""),
            mall_status=int(data.get("mallStatus") or 0),
            is_semi_managed_mall=bool(data.get("isSemiManagedMall", False)),
            logo=data.get("logo", ""),
        )


@dataclass
class UserInfo:
    account_id: int
    account_type: int = 0
    mall_list: List[Mall] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserInfo":
        return cls(
            account_id=int(data.get("accountId") or 0),
            account_type=int(data.get("accountType") or 0),
            mall_list=[Mall.from_dict(m) for m in data.get("mallList") or []],
        )


@dataclass
class MallInfo:
    """Store entry from the seller portal's company list."""
    mall_id: int
    mall_name: str
    is_semi_managed_mall: bool = False
    managed_type: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MallInfo":
        return cls(
            mall_id=int(data.get("mallId") or 0),
            mall_name=data.get("mallName", ""),
            is_semi_managed_mall=bool(data.get("isSemiManagedMall", False)),
            managed_type=int(data.get("managedType") or 0),
        )


@dataclass
class Order:
    parent_order_sn: str
    order_status: int
    region_name: str = ""
    goods_count: int = 0
    create_time: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        parent = data.get("parentOrderMap") or {}
        return cls(
            parent_order_sn=parent.get("parentOrderSn", ""),
            order_status=int(parent.get("parentOrderStatus") or 0),
            region_name=parent.get("regionName", ""),
            goods_count=len(data.get("orderList") or []),
            create_time=int(parent.get("parentOrderTime") or 0),
        )


@dataclass
class OrderPage:
    orders: List[Order]
    total: int
    total_pages: int
    is_last_page: bool
