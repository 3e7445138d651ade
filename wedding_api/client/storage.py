import json
import logging
from pathlib import Path

from pydantic import ValidationError

from wedding_api.guests.schemas import GroupResponse

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".wedding_rsvp_group.json"


class SavedGroupStore:
    """Remembers the group a guest picked so a returning guest can skip the lookup."""

    def __init__(self, path: Path = DEFAULT_STORE_PATH):
        self.path = Path(path)

    def load(self) -> GroupResponse | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return GroupResponse.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Ignoring unreadable saved group at %s: %s", self.path, e)
            return None

    def save(self, group: GroupResponse) -> None:
        self.path.write_text(group.model_dump_json(by_alias=True), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
