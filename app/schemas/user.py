from typing import Literal

from pydantic import BaseModel, ConfigDict


class UserForm(BaseModel):
    """Fields submitted to register or login. Missing form fields arrive as empty strings."""

    email: str = ""
    password: str = ""
    full_name: str = ""
    address: str = ""
    phone_number: str = ""
    role: str = ""


class UserPublic(BaseModel):
    """
    User record returned to clients and sibling services.

    Has no digest field to copy from the row; ``password`` is kept on the wire as a
    constant empty string for consumers that expect the key.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    password: Literal[""] = ""
    full_name: str
    address: str
    phone_number: str
    role: str
