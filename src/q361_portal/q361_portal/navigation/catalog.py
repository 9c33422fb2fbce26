"""Sidebar catalog. Order here is the order users see."""

from __future__ import annotations

from ..core.constants import TRIAL_REQUESTS_ROUTE, TRIAL_REQUESTS_SOURCE
from ..core.enums import PermissionModule as P
from ..core.enums import Role as R
from .model import category, entry

# Studio / social-media roles, shared by most self-service screens.
STUDIO_STAFF = (
    R.CONTENT_CREATOR,
    R.SOCIAL_MEDIA_SPECIALIST,
    R.CONTENT_EDITOR,
    R.CREATIVE_DIRECTOR,
    R.SOCIAL_MEDIA_MANAGER,
)
HR = (R.HR_ADMIN, R.ADMIN)
HR_BRANCH = (R.HR_ADMIN, R.BRANCH_MANAGER, R.ADMIN)
LEADS = (R.HR_ADMIN, R.BRANCH_MANAGER, R.TEAM_LEAD, R.ADMIN)
STAFF = LEADS + (R.EMPLOYEE,) + STUDIO_STAFF
EVERYONE = STAFF + (R.LOGISTICS_MANAGER, R.DEPARTMENT_HEAD)
CRM_USERS = LEADS + (R.EMPLOYEE,)
STUDIO = (R.STUDIO_MANAGER,) + STUDIO_STAFF + HR


NAVIGATION_MODEL = (
    category(
        "Core Management",
        entry("Dashboard", "/", "layout-dashboard", STAFF + (R.LOGISTICS_MANAGER,)),
        entry("Employees", "/employees", "users", LEADS, permission=P.EMPLOYEE_MANAGEMENT),
        entry("Departments", "/departments", "building-2", HR_BRANCH + (R.DEPARTMENT_HEAD,)),
        entry("Dept. Management", "/department-management", "shield", HR_BRANCH),
        entry("Organization", "/organization", "building-2", EVERYONE + (R.PROJECT_MANAGER,)),
    ),
    category(
        "Employee Onboarding",
        entry("Job Applications", "/job-applications", "briefcase", HR),
        entry("Contracts", "/contract-management", "file-text", HR_BRANCH, permission=P.CONTRACT_MANAGEMENT),
        entry("My Contracts", "/my-contracts", "file-text", (R.EMPLOYEE,) + STUDIO_STAFF),
        entry("Onboarding", "/onboarding", "user-plus", STAFF),
        entry("Checklists", "/onboarding-checklist-manager", "clipboard-check", HR_BRANCH),
        entry("HR Process", "/hr-onboarding", "user-check", HR_BRANCH),
        entry("Approvals", "/registration-approvals", "user-check", HR),
        entry("Banking", "/banking-overview", "credit-card", HR_BRANCH),
    ),
    category(
        "Assessment & Testing",
        entry("Psychometric Tests", "/psychometric-admin", "brain", HR_BRANCH),
        entry("Test Results", "/psychometric-results", "trending-up", HR),
        entry("Onboarding Tests", "/onboarding-tests", "target", HR_BRANCH),
    ),
    category(
        "Project & Task Management",
        entry("Projects", "/projects", "folder-kanban", STAFF),
        entry("Tasks", "/tasks", "list-todo", STAFF),
        entry("Task Requests", "/task-requests", "help-circle", STAFF + (R.DEPARTMENT_HEAD,)),
        entry("Team Meetings", "/team-meetings", "calendar", LEADS),
        entry("Leave Management", "/leave-management", "calendar-days", EVERYONE, permission=P.LEAVE_MANAGEMENT),
    ),
    category(
        "CRM & Sales",
        entry("Inquiries", "/crm-inquiries", "phone", CRM_USERS),
        entry("Daily Log", "/crm-daily-log", "message-square", CRM_USERS),
        entry("CRM Dashboard", "/crm-management-dashboard", "bar-chart-3", HR_BRANCH),
        entry("CEO Meeting", "/ceo-crm-meeting", "clapperboard", CRM_USERS),
        entry("CRM Access", "/crm-access-management", "shield", HR),
    ),
    category(
        "Communication & Recognition",
        entry("Announcements", "/announcements", "megaphone", HR_BRANCH, permission=P.ANNOUNCEMENTS),
        entry("Recognition", "/recognition", "award", STAFF),
        entry("Email Center", "/email-test", "mail", HR),
        entry("Handbook", "/handbook-management", "book-open", HR),
    ),
    category(
        "Operations & Reports",
        entry("Logistics", "/logistics", "boxes", (R.HR_ADMIN, R.LOGISTICS_MANAGER, R.ADMIN)),
        entry("Approvals", "/hr-logistics-approvals", "check-circle", HR),
        entry("Daily Reports", "/daily-reports", "calendar-days", HR_BRANCH),
        entry("PDF Export", "/onboarding-pdf-export", "file-down", HR_BRANCH),
        entry("Analytics", "/analytics", "bar-chart-3", HR_BRANCH),
    ),
    category(
        "Q361 Studio",
        entry("Studio Dashboard", "/social-media", "sparkles", STUDIO),
        entry("Social Manager", "/social-media-manager", "share-2", STUDIO),
    ),
    category(
        "System",
        entry("Super Admin", "/super-admin", "crown", HR),
        entry("Trial Requests", TRIAL_REQUESTS_ROUTE, "credit-card", HR, notification=TRIAL_REQUESTS_SOURCE),
        entry("Subscriptions", "/admin/subscription-management", "dollar-sign", HR),
        entry("Settings", "/settings", "settings", EVERYONE),
    ),
)


def all_routes() -> tuple:
    return tuple(e.route for c in NAVIGATION_MODEL for e in c.entries)


def find_entry(route: str):
    for c in NAVIGATION_MODEL:
        for e in c.entries:
            if e.route == route:
                return e
    return None
