"""Example: print the sidebar a given user would see, without going through Flask."""

import importlib
import sys

from config import get_settings_module

from src.q361_portal.q361_portal.container import Settings, build_container
from src.q361_portal.q361_portal.navigation.visibility import role_display_name, visible_navigation


def main(username: str = "admin"):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=Settings.from_module(settings))

    user = container.users_repo.get_by_username(username)
    if user is None:
        print(f"No such user: {username}")
        return
    principal = container.session_service.build_principal(user)
    badges = container.badge_registry.for_principal(principal)

    print(f"{principal.display_name} ({role_display_name(principal.role)})")
    for category in visible_navigation(principal, badges=badges):
        print(f"\n{category.title}")
        for item in category.entries:
            badge = f"  [{item.badge}]" if item.badge else ""
            print(f"  {item.label:<32} {item.route}{badge}")


if __name__ == "__main__":
    main(*sys.argv[1:2])
