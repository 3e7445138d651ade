ADMIN_PREFIX = "/api/admin"

GUESTS_URL = f"{ADMIN_PREFIX}/guests"
GUEST_URL = f"{ADMIN_PREFIX}/guests/{{guest_id}}"
GUESTS_EXPORT_URL = f"{ADMIN_PREFIX}/guests/export.csv"
GROUPS_URL = f"{ADMIN_PREFIX}/groups"
GROUP_URL = f"{ADMIN_PREFIX}/groups/{{group_id}}"
STATS_URL = f"{ADMIN_PREFIX}/stats"
REMINDERS_URL = f"{ADMIN_PREFIX}/reminders/{{kind}}"
