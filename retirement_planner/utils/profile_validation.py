"""Shared age-range validation for projection entry points."""

from typing import TYPE_CHECKING

from retirement_planner.config import settings

if TYPE_CHECKING:
    from retirement_planner.schemas.retirement import Profile


class ProjectionInputError(ValueError):
    """Raised when projection inputs describe an impossible timeline."""


def validate_age_range(current_age: int, retirement_age: int, life_expectancy: int) -> None:
    """Validate the ages that bound a projection.

    Raises ProjectionInputError if:
      - current_age is negative
      - retirement_age is not after current_age
      - life_expectancy is not after retirement_age
      - life_expectancy exceeds MAX_PLANNING_AGE
    """
    if current_age < 0:
        raise ProjectionInputError("current_age cannot be negative")

    if retirement_age <= current_age:
        raise ProjectionInputError(
            f"retirement_age ({retirement_age}) must be greater than current_age ({current_age})"
        )

    if life_expectancy <= retirement_age:
        raise ProjectionInputError(
            f"life_expectancy ({life_expectancy}) must be greater than "
            f"retirement_age ({retirement_age})"
        )

    if life_expectancy > settings.MAX_PLANNING_AGE:
        raise ProjectionInputError(
            f"life_expectancy cannot exceed {settings.MAX_PLANNING_AGE}"
        )


def validate_profile_ages(profile: "Profile") -> None:
    """Validate a Profile's ages before any projection begins."""
    validate_age_range(profile.current_age, profile.retirement_age, profile.life_expectancy)
