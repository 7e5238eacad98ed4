"""
Account roles and their role-specific identifiers.

Each role variant carries only the identifier it needs, so a profile payload
can never hold a stray or contradictory identifier field:

  - ServingPersonnel -> service_number
  - Veteran          -> ppo_number (pension payment order)
  - FamilyMember     -> sponsor_service_number (sponsor's service or PPO number)
  - Civilian         -> nothing
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Role(str, Enum):
    PERSONNEL = "personnel"
    VETERAN = "veteran"
    FAMILY = "family"
    CIVILIAN = "civilian"


ROLE_DISPLAY_NAMES = {
    Role.PERSONNEL: "Serving Personnel",
    Role.VETERAN: "Ex-Servicemen (Veteran)",
    Role.FAMILY: "Family Member",
    Role.CIVILIAN: "Civilian",
}

ROLE_DESCRIPTIONS = {
    Role.PERSONNEL: "Active military service members",
    Role.VETERAN: "Former military service members",
    Role.FAMILY: "Family member of military personnel",
    Role.CIVILIAN: "Civilian community member",
}

# Column names of the role-specific identifiers in the `users` table.
IDENTIFIER_FIELDS = ("service_number", "ppo_number", "sponsor_service_number")


@dataclass(frozen=True)
class ServingPersonnel:
    service_number: str
    role = Role.PERSONNEL


@dataclass(frozen=True)
class Veteran:
    ppo_number: str
    role = Role.VETERAN


@dataclass(frozen=True)
class FamilyMember:
    sponsor_service_number: str
    role = Role.FAMILY


@dataclass(frozen=True)
class Civilian:
    role = Role.CIVILIAN


RoleDetails = Union[ServingPersonnel, Veteran, FamilyMember, Civilian]


def identifier_field(role: Role) -> Optional[str]:
    """Name of the identifier column a role requires, None for civilians."""
    return {
        Role.PERSONNEL: "service_number",
        Role.VETERAN: "ppo_number",
        Role.FAMILY: "sponsor_service_number",
    }.get(Role(role))


def role_identifier(details: RoleDetails) -> dict[str, str]:
    """The single identifier entry for a role, or {} for civilians."""
    field = identifier_field(details.role)
    if field is None:
        return {}
    return {field: getattr(details, field)}


def role_display_name(role: str) -> str:
    """Display label for a stored role value; unknown values pass through."""
    try:
        return ROLE_DISPLAY_NAMES[Role(role)]
    except ValueError:
        return role
