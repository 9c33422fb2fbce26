"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SUPERUSER_USERNAME = "admin"

DEFAULT_SESSION_DAYS = 7
DEFAULT_POLL_INTERVAL_SECONDS = 300
# Badge resolvers unused for this long are dropped (matches the default session lifetime).
DEFAULT_RESOLVER_IDLE_SECONDS = DEFAULT_SESSION_DAYS * 24 * 3600
DEFAULT_HTTP_TIMEOUT_SECONDS = 10

BADGE_DISPLAY_CAP = 99

TRIAL_REQUESTS_SOURCE = "trial-requests"
PENDING_TRIAL_COUNT_PATH = "/api/trial-requests/pending/count"
TRIAL_REQUESTS_ROUTE = "/admin/trial-requests"

# Routes unlocked by a per-user flag regardless of role.
JOB_APPLICATIONS_ROUTES = frozenset({"/job-applications"})
CRM_ROUTES = frozenset(
    {
        "/crm-inquiries",
        "/crm-daily-log",
        "/crm-management-dashboard",
        "/ceo-crm-meeting",
    }
)

ORGANIZATION_ROUTE = "/organization"
ORGANIZATION_ADMIN_LABEL = "Organization"
ORGANIZATION_MEMBER_LABEL = "Responsibilities & Reporting"
