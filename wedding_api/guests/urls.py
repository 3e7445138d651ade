RSVP_PREFIX = "/api/rsvp"

LOOKUP_URL = f"{RSVP_PREFIX}/lookup"
RSVP_STATUS_URL = f"{RSVP_PREFIX}/status"
SUBMIT_RSVP_URL = RSVP_PREFIX
