"""Completeness checks for profiles arriving from the extraction layer."""

from __future__ import annotations

from infrashadows.models.schemas import BuildingProfile, ProfileValidation

REQUIRED_FIELDS = ("floors", "units", "location")


class MissingInputError(ValueError):
    """A profile lacks fields the analysis needs to be meaningful."""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = missing_fields
        super().__init__(f"Missing required fields: {', '.join(missing_fields)}")


def find_missing_fields(profile: BuildingProfile) -> list[str]:
    missing = []
    for name in REQUIRED_FIELDS:
        value = getattr(profile, name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def validate_profile(profile: BuildingProfile) -> ProfileValidation:
    missing = find_missing_fields(profile)
    return ProfileValidation(complete=not missing, missing_fields=missing)


def ensure_complete(profile: BuildingProfile) -> None:
    """Raise MissingInputError when a required field is absent."""
    missing = find_missing_fields(profile)
    if missing:
        raise MissingInputError(missing)
