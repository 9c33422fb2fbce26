from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Roles used for access control."""

    HR_ADMIN = "hr_admin"
    BRANCH_MANAGER = "branch_manager"
    TEAM_LEAD = "team_lead"
    EMPLOYEE = "employee"
    LOGISTICS_MANAGER = "logistics_manager"
    DEPARTMENT_HEAD = "department_head"
    PROJECT_MANAGER = "project_manager"
    STUDIO_MANAGER = "studio_manager"
    SOCIAL_MEDIA_MANAGER = "social_media_manager"
    CONTENT_CREATOR = "content_creator"
    CONTENT_EDITOR = "content_editor"
    SOCIAL_MEDIA_SPECIALIST = "social_media_specialist"
    CREATIVE_DIRECTOR = "creative_director"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        """Return the matching role, or None for unknown/missing values."""
        if isinstance(value, Role):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class PermissionModule(str, Enum):
    """Modules that support fine-grained access overrides."""

    EMPLOYEE_MANAGEMENT = "employee_management"
    CONTRACT_MANAGEMENT = "contract_management"
    ANNOUNCEMENTS = "announcements"
    LEAVE_MANAGEMENT = "leave_management"


class PermissionLevel(str, Enum):
    NONE = "none"
    VIEW = "view"
    MANAGE = "manage"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ONBOARDING = "onboarding"
    TERMINATED = "terminated"


class TrialRequestStatus(str, Enum):
    """Review state of a subscription trial request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LandingComponent(str, Enum):
    """Page rendered at `/` depending on who is signed in."""

    LANDING = "landing"
    PERSONAL_DASHBOARD = "personal_dashboard"
    LOGISTICS_DASHBOARD = "logistics_dashboard"
    ADMIN_DASHBOARD = "admin_dashboard"
