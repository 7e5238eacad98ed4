"""Role-conditioned signup validation and profile payloads."""
import pytest

from core import routes
from core.accounts.roles import IDENTIFIER_FIELDS, Role
from core.accounts.signup import SignupForm, build_profile_payload, submit_signup, validate_form
from core.errors import FormValidationError, ProviderError

ROLE_FIELD = {
    Role.PERSONNEL: "service_number",
    Role.VETERAN: "ppo_number",
    Role.FAMILY: "sponsor_service_number",
}


def _form(role: Role, **overrides) -> SignupForm:
    values = dict(
        role=role,
        email="member@example.com",
        password="pass1234",
        name="Alex Doe",
        service_number="SN-42",
        ppo_number="PPO-42",
        sponsor_service_number="SP-42",
    )
    values.update(overrides)
    return SignupForm(**values)


@pytest.mark.parametrize("role", [Role.PERSONNEL, Role.VETERAN, Role.FAMILY])
def test_missing_role_identifier_is_rejected(role):
    with pytest.raises(FormValidationError):
        validate_form(_form(role, **{ROLE_FIELD[role]: ""}))


@pytest.mark.parametrize("role", list(Role))
def test_complete_form_is_accepted(role):
    details = validate_form(_form(role))
    assert details.role is role


def test_civilian_needs_no_identifier():
    details = validate_form(_form(Role.CIVILIAN, service_number="", ppo_number="", sponsor_service_number=""))
    assert details.role is Role.CIVILIAN


def test_other_roles_identifiers_are_not_required():
    form = _form(Role.VETERAN, service_number="", sponsor_service_number="")
    assert validate_form(form).ppo_number == "PPO-42"


@pytest.mark.parametrize("field", ["email", "password", "name"])
def test_common_fields_required(field):
    with pytest.raises(FormValidationError) as exc:
        validate_form(_form(Role.CIVILIAN, **{field: ""}))
    assert exc.value.title == "Missing Information"


def test_first_failure_wins():
    # Both name and service number are missing; only the common-field error is reported.
    with pytest.raises(FormValidationError) as exc:
        validate_form(_form(Role.PERSONNEL, name="", service_number=""))
    assert exc.value.title == "Missing Information"


def test_whitespace_counts_as_empty():
    with pytest.raises(FormValidationError):
        validate_form(_form(Role.PERSONNEL, service_number="   "))


@pytest.mark.parametrize("role", list(Role))
def test_payload_carries_only_the_role_identifier(role):
    payload = build_profile_payload("Alex Doe", validate_form(_form(role)))
    present = [f for f in IDENTIFIER_FIELDS if f in payload]
    if role is Role.CIVILIAN:
        assert present == []
    else:
        assert present == [ROLE_FIELD[role]]
    assert payload["role"] == role.value
    assert payload["name"] == "Alex Doe"


def test_family_without_sponsor_makes_no_call(recording_auth):
    result = submit_signup(_form(Role.FAMILY, sponsor_service_number=""), recording_auth)
    assert not result.ok
    assert "Sponsor's Service Number or Veteran PPO Number" in result.notification.description
    assert result.notification.is_error
    assert recording_auth.calls == []


def test_submit_sends_combined_request(recording_auth):
    result = submit_signup(_form(Role.VETERAN), recording_auth)
    assert result.ok
    assert result.redirect_to == routes.HOME
    email, password, payload = recording_auth.calls[0]
    assert email == "member@example.com"
    assert password == "pass1234"
    assert payload == {"name": "Alex Doe", "role": "veteran", "ppo_number": "PPO-42"}


def test_provider_message_is_shown_verbatim(recording_auth):
    recording_auth.raise_error = ProviderError("User already registered")
    result = submit_signup(_form(Role.CIVILIAN), recording_auth)
    assert not result.ok
    assert result.notification.title == "Signup Failed"
    assert result.notification.description == "User already registered"
    assert result.redirect_to is None


def test_unexpected_error_is_generic(recording_auth):
    recording_auth.raise_error = RuntimeError("socket closed")
    result = submit_signup(_form(Role.CIVILIAN), recording_auth)
    assert not result.ok
    assert result.notification.title == "Signup Error"
    assert "socket closed" not in result.notification.description


def test_signup_against_real_provider_creates_profile(auth, db_path):
    from core.db.db import get_conn
    from core.db.repo import get_profile

    result = submit_signup(_form(Role.FAMILY), auth)
    assert result.ok
    session = auth.get_session()
    profile = get_profile(get_conn(db_path), session.user.id)
    assert profile["role"] == "family"
    assert profile["sponsor_service_number"] == "SP-42"
    assert profile["service_number"] is None
    assert profile["ppo_number"] is None
