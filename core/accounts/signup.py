"""
Role-conditioned signup.

The form keeps a flat field set, but only the identifier belonging to the
selected role is validated and sent. Validation is ordered and stops at the
first failure; nothing is sent to the provider unless it passes.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from core import routes
from core.accounts.roles import (
    Civilian, FamilyMember, Role, RoleDetails, ServingPersonnel, Veteran, role_identifier,
)
from core.auth.context import AuthContext
from core.errors import FormValidationError, ProviderError
from core.notify import ActionResult, error, info

logger = logging.getLogger(__name__)


@dataclass
class SignupForm:
    role: Role = Role.PERSONNEL
    email: str = ""
    password: str = ""
    name: str = ""
    service_number: str = ""
    ppo_number: str = ""
    sponsor_service_number: str = ""


def _filled(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def validate_form(form: SignupForm) -> RoleDetails:
    """Return the role variant for a valid form, raise FormValidationError otherwise."""
    if not (_filled(form.email) and _filled(form.password) and _filled(form.name)):
        raise FormValidationError("Missing Information", "Please fill in all required fields.")

    role = Role(form.role)
    if role is Role.PERSONNEL:
        if not _filled(form.service_number):
            raise FormValidationError(
                "Service Number Required", "Service Number is required for serving personnel."
            )
        return ServingPersonnel(service_number=form.service_number.strip())
    if role is Role.VETERAN:
        if not _filled(form.ppo_number):
            raise FormValidationError("PPO Number Required", "PPO Number is required for veterans.")
        return Veteran(ppo_number=form.ppo_number.strip())
    if role is Role.FAMILY:
        if not _filled(form.sponsor_service_number):
            raise FormValidationError(
                "Sponsor Information Required",
                "Sponsor's Service Number or Veteran PPO Number is required for family members.",
            )
        return FamilyMember(sponsor_service_number=form.sponsor_service_number.strip())
    return Civilian()


def build_profile_payload(name: str, details: RoleDetails) -> dict:
    """{name, role} plus exactly the role's own identifier (none for civilians)."""
    payload = {"name": name.strip(), "role": details.role.value}
    payload.update(role_identifier(details))
    return payload


def submit_signup(form: SignupForm, auth: AuthContext) -> ActionResult:
    try:
        details = validate_form(form)
    except FormValidationError as e:
        return ActionResult(False, error(e.title, e.message))

    payload = build_profile_payload(form.name, details)
    try:
        auth.sign_up(form.email.strip(), form.password, payload)
    except ProviderError as e:
        logger.warning("Signup rejected: %s", e.message)
        return ActionResult(False, error("Signup Failed", e.message))
    except Exception:
        logger.exception("Signup failed unexpectedly")
        return ActionResult(False, error("Signup Error", "An unexpected error occurred. Please try again."))

    return ActionResult(
        True,
        info("Account Created Successfully", "Welcome! Your account has been created."),
        redirect_to=routes.HOME,
    )
