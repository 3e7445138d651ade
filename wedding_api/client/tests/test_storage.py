from uuid import uuid4

from wedding_api.client.storage import SavedGroupStore
from wedding_api.guests.dtos import GuestStatus
from wedding_api.guests.schemas import GroupResponse, GuestResponse


def make_group_response() -> GroupResponse:
    group_id = uuid4()
    return GroupResponse(
        id=group_id,
        name="Garcia",
        guests=[
            GuestResponse(
                id=uuid4(),
                group_id=group_id,
                first_name="Maria",
                last_name="Garcia",
                rsvp_status=GuestStatus.MAYBE,
                events=["mehndi"],
            )
        ],
    )


def test_save_and_load(tmp_path):
    store = SavedGroupStore(tmp_path / "group.json")
    group = make_group_response()

    store.save(group)

    assert store.load() == group
    assert '"firstName":"Maria"' in store.path.read_text()


def test_load_missing_file(tmp_path):
    assert SavedGroupStore(tmp_path / "absent.json").load() is None


def test_unreadable_file_is_ignored(tmp_path, caplog):
    path = tmp_path / "group.json"
    path.write_text("{not json")

    assert SavedGroupStore(path).load() is None
    assert "Ignoring unreadable saved group" in caplog.text


def test_clear_is_idempotent(tmp_path):
    store = SavedGroupStore(tmp_path / "group.json")
    store.save(make_group_response())

    store.clear()
    store.clear()

    assert not store.path.exists()
