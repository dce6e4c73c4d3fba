"""Domain enums (pure, dependency-light).

Values are the wire spellings used by Microsoft Graph.
"""

from __future__ import annotations

from enum import StrEnum


class TeamVisibility(StrEnum):
    PRIVATE = "private"
    PUBLIC = "public"


class TeamSpecialization(StrEnum):
    NONE = "none"
    EDUCATION_STANDARD = "educationStandard"
    EDUCATION_CLASS = "educationClass"
    EDUCATION_PROFESSIONAL_LEARNING_COMMUNITY = "educationProfessionalLearningCommunity"
    EDUCATION_STAFF = "educationStaff"
    HEALTHCARE_STANDARD = "healthcareStandard"
    HEALTHCARE_CARE_COORDINATION = "healthcareCareCoordination"


class GiphyContentRating(StrEnum):
    MODERATE = "moderate"
    STRICT = "strict"


class SecurityRole(StrEnum):
    """Group link collections reconciled by the security step, in apply order."""

    OWNERS = "owners"
    MEMBERS = "members"
