"""
Account request contracts: authentication and user management.

Only the shape of each request is checked here. Password hashing, token
issuing, wallet signature checks and Google token verification belong to
the auth collaborator.
"""

from typing import Annotated

from pydantic import Field

from inspection_core.config import (
    PASSWORD_MIN_LENGTH,
    PASSWORD_PATTERN,
    PIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    USERNAME_PATTERN,
    WHATSAPP_MAX_LENGTH,
    WHATSAPP_MIN_LENGTH,
    WHATSAPP_PATTERN,
)
from inspection_core.models import Contract, Role
from inspection_core.rules import Email, NonEmptyStr, length, matches, one_of

Password = Annotated[NonEmptyStr, length(PASSWORD_MIN_LENGTH)]
Pin = Annotated[NonEmptyStr, length(PIN_LENGTH, PIN_LENGTH)]
Username = Annotated[NonEmptyStr, length(USERNAME_MIN_LENGTH)]
WhatsAppNumber = Annotated[
    str,
    matches(WHATSAPP_PATTERN, "must start with +62 and only contain digits"),
    length(WHATSAPP_MIN_LENGTH, WHATSAPP_MAX_LENGTH),
]


# --- Auth ---

class ChangePasswordRequest(Contract):
    current_password: str | None = Field(None, alias="currentPassword")
    new_password: Annotated[
        Password,
        matches(PASSWORD_PATTERN, "must contain at least one letter and one number"),
    ] = Field(alias="newPassword")


class LoginUserRequest(Contract):
    login_identifier: NonEmptyStr = Field(alias="loginIdentifier")
    password: NonEmptyStr


class LoginWalletRequest(Contract):
    wallet_address: NonEmptyStr = Field(alias="walletAddress")
    signature: NonEmptyStr


class LinkWalletRequest(Contract):
    wallet_address: NonEmptyStr = Field(alias="walletAddress")
    signature: str | None = None


class LinkGoogleRequest(Contract):
    id_token: NonEmptyStr = Field(alias="idToken")


class LoginInspectorRequest(Contract):
    pin: Pin
    email: Email


class RegisterUserRequest(Contract):
    email: Email
    username: Annotated[
        NonEmptyStr,
        length(USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH),
        matches(USERNAME_PATTERN, "can only contain alphanumeric characters and underscores"),
    ]
    password: Password
    name: NonEmptyStr | None = None
    wallet_address: str | None = Field(None, alias="walletAddress")


# --- Users ---

class CreateAdminRequest(Contract):
    username: NonEmptyStr
    email: Email
    password: Password
    role: Annotated[Role, one_of(Role.ADMIN, Role.SUPERADMIN)]


class CreateInspectorRequest(Contract):
    email: Email
    username: Username
    name: NonEmptyStr
    wallet_address: str | None = Field(None, alias="walletAddress")
    whatsapp_number: WhatsAppNumber | None = Field(None, alias="whatsappNumber")
    inspection_branch_city_id: str | None = Field(None, alias="inspectionBranchCityId")


class UpdateInspectorRequest(Contract):
    name: str | None = None
    username: Username | None = None
    email: Email | None = None
    wallet_address: str | None = Field(None, alias="walletAddress")
    whatsapp_number: WhatsAppNumber | None = Field(None, alias="whatsappNumber")
    inspection_branch_city_id: str | None = Field(None, alias="inspectionBranchCityId")


class UpdateUserRequest(Contract):
    email: Email | None = None
    username: Username | None = None
    name: str | None = None
    wallet_address: str | None = Field(None, alias="walletAddress")
    pin: Annotated[str, length(PIN_LENGTH)] | None = None


class UpdateUserRoleRequest(Contract):
    role: Role
