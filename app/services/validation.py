"""Presence checks for register and login forms."""

from typing import Literal

from app.schemas.user import UserForm

FormType = Literal["register", "login"]

# Checked in this order; the first blank field is the one reported.
LOGIN_FIELDS = ("email", "password")
REGISTER_FIELDS = LOGIN_FIELDS + ("full_name", "address", "phone_number", "role")


def validate_user_form(form: UserForm, form_type: FormType) -> tuple[bool, str | None]:
    """
    Validate that every field the form type needs is non-blank.

    Whitespace-only counts as blank. No format checks are made.

    Returns: (is_valid, error_message)
    """
    fields = REGISTER_FIELDS if form_type == "register" else LOGIN_FIELDS
    for field in fields:
        if not getattr(form, field).strip():
            return False, f"{field} empty/not found"
    return True, None
