from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_serializer
from pydantic.alias_generators import to_camel

from personalbook.models.account import AccountRole


class UserRegister(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class AccountSummary(BaseModel):
    """Row of the master's user list"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    username: str
    email: str
    secret_id: str
    role: AccountRole
    registered_at: str

    @field_serializer('role')
    def serialize_role(self, value: AccountRole) -> str:
        return value.value


class AccountResponse(AccountSummary):
    """Created account, returned to the master after registration"""
    id: str


class MessageResponse(BaseModel):
    message: str
