from pydantic import BaseModel, ConfigDict, EmailStr, model_validator
from pydantic.alias_generators import to_camel
from typing import Literal, Optional


class UserLogin(BaseModel):
    """
    Login request, discriminated by `type`.

    master: {type, email, password}
    user:   {type, email, secretId}
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: Literal["master", "user"] = "user"
    email: EmailStr
    password: Optional[str] = None
    secret_id: Optional[str] = None

    @model_validator(mode='after')
    def validate_credential_for_type(self):
        """Each login type needs its own credential"""
        if self.type == "master" and not self.password:
            raise ValueError("password is required for master login")
        if self.type == "user":
            if not self.secret_id or not self.secret_id.strip():
                raise ValueError("secretId is required for user login")
            self.secret_id = self.secret_id.strip()
        return self


class LoginResponse(BaseModel):
    token: str
    role: str
    username: str
    # Present for user logins only
    id: Optional[str] = None


class CallerResponse(BaseModel):
    role: str
    id: str
    username: str
