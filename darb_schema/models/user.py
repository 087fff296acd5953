# 說明：本模組定義 users 資料表的 schema 描述器，依傳入的 SchemaContext 與型別登錄表註冊欄位、索引與 ORM 映射。
from __future__ import annotations

import enum
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import Column, Index, Table, event, false, func, true
from sqlalchemy.orm import validates

from ..context import SchemaContext
from ..exceptions import InvalidEmailError, InvalidUserTypeError
from ..types import TypeRegistry

logger = logging.getLogger(__name__)

USERS_TABLE = "users"

# 欄位名稱 -> ORM 屬性名稱；欄位名稱保留宣告時的大小寫
USER_COLUMN_ATTRIBUTES: Dict[str, str] = {
    "id": "id",
    "email": "email",
    "password": "password",
    "fullName": "full_name",
    "userType": "user_type",
    "companyName": "company_name",
    "phoneNumber": "phone_number",
    "address": "address",
    "bvn": "bvn",
    "cacNumber": "cac_number",
    "accountNumber": "account_number",
    "bankName": "bank_name",
    "profileImageUrl": "profile_image_url",
    "isActive": "is_active",
    "isVerified": "is_verified",
    "emailVerifiedAt": "email_verified_at",
    "lastLoginAt": "last_login_at",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


class UserType(str, enum.Enum):
    """使用者類型，封閉集合。"""

    FOUNDER = "founder"
    INVESTOR = "investor"
    ADMIN = "admin"


def _enum_values(enum_cls: type[enum.Enum]) -> List[str]:
    return [member.value for member in enum_cls]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_email_syntax(value: str) -> None:
    # 只檢查語法：不查 DNS，也不排除 .local、.test 等保留網域
    validate_email(value, check_deliverability=False, globally_deliverable=False)


class UserRecord:
    """users 資料表對應類別的共同基底，提供建構子與屬性驗證。"""

    def __init__(self, **kwargs: Any) -> None:
        cls = type(self)
        for key, value in kwargs.items():
            if not hasattr(cls, key):
                raise TypeError(f"{key!r} 不是 {cls.__name__} 的有效屬性")
            setattr(self, key, value)

    @validates("email")
    def _validate_email(self, key: str, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not isinstance(value, str):
            raise InvalidEmailError(value)
        try:
            _check_email_syntax(value)
        except EmailNotValidError as exc:
            raise InvalidEmailError(value) from exc
        return value

    @validates("user_type")
    def _validate_user_type(self, key: str, value: Any) -> Optional[UserType]:
        if value is None or isinstance(value, UserType):
            return value
        try:
            return UserType(value)
        except ValueError:
            raise InvalidUserTypeError(value, _enum_values(UserType)) from None

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} id={getattr(self, 'id', None)!r} "
            f"email={getattr(self, 'email', None)!r} user_type={getattr(self, 'user_type', None)!r}>"
        )


def _stamp_created(mapper, connection, target: UserRecord) -> None:
    if target.created_at is None:
        target.created_at = _utcnow()
    if target.updated_at is None:
        target.updated_at = target.created_at


def define_users(context: SchemaContext, types: TypeRegistry) -> type[UserRecord]:
    """在 context 上註冊 users 資料表並回傳映射後的類別。

    每次呼叫都會建立新的映射類別；同一個 context 重複註冊時由 SQLAlchemy
    拋出 ``InvalidRequestError``。
    """

    users = Table(
        USERS_TABLE,
        context.metadata,
        Column("id", types.INTEGER(), primary_key=True, autoincrement=True),
        Column("email", types.STRING(100), nullable=False),
        Column("password", types.STRING(255), nullable=False),
        Column("fullName", types.STRING(100), nullable=False),
        Column(
            "userType",
            types.ENUM(
                UserType,
                name="user_type",
                values_callable=_enum_values,
                validate_strings=True,
            ),
            nullable=False,
        ),
        Column("companyName", types.STRING(100), nullable=True),
        Column("phoneNumber", types.STRING(20), nullable=True),
        Column("address", types.TEXT(), nullable=True),
        Column("bvn", types.STRING(11), nullable=True),
        Column("cacNumber", types.STRING(50), nullable=True),
        Column("accountNumber", types.STRING(10), nullable=True),
        Column("bankName", types.STRING(50), nullable=True),
        Column("profileImageUrl", types.STRING(255), nullable=True),
        Column("isActive", types.BOOLEAN(), default=True, server_default=true()),
        Column("isVerified", types.BOOLEAN(), default=False, server_default=false()),
        Column("emailVerifiedAt", types.DATE(timezone=True), nullable=True),
        Column("lastLoginAt", types.DATE(timezone=True), nullable=True),
        Column(
            "createdAt",
            types.DATE(timezone=True),
            nullable=False,
            default=_utcnow,
            server_default=func.now(),
        ),
        Column(
            "updatedAt",
            types.DATE(timezone=True),
            nullable=False,
            default=_utcnow,
            onupdate=_utcnow,
            server_default=func.now(),
        ),
        Index("users_email", "email", unique=True),
        Index("users_user_type", "userType"),
        Index("users_is_active", "isActive"),
    )

    user_cls = type(
        "User",
        (UserRecord,),
        {"__module__": __name__, "__doc__": "users 資料表的映射類別。"},
    )
    context.registry.map_imperatively(
        user_cls,
        users,
        properties={attr: users.c[column] for column, attr in USER_COLUMN_ATTRIBUTES.items()},
    )
    event.listen(user_cls, "before_insert", _stamp_created)

    logger.debug("已註冊資料表 %s（%d 個欄位）", users.name, len(users.columns))
    return user_cls
