"""
Tests for the local flag store
"""

import json
import threading
from uuid import uuid4

import pytest

from conftest import make_enquiry
from crm.dependencies import repositories
from crm.services.flag_store import LocalFlagStore


class TestLocalFlagStore:
    def test_unknown_id_is_not_flagged(self, flag_store, faker):
        assert flag_store.is_flagged(faker.uuid4()) is False

    def test_remember_and_discard(self, flag_store, faker):
        enquiry_id = faker.uuid4(cast_to=None)

        flag_store.remember(enquiry_id, True)
        assert flag_store.is_flagged(enquiry_id) is True
        assert flag_store.is_flagged(str(enquiry_id)) is True

        flag_store.discard(enquiry_id)
        assert flag_store.flags == {}

    def test_persists_to_file(self, tmp_path, faker):
        path = tmp_path / "state" / "flags.json"
        enquiry_id = faker.uuid4(cast_to=None)

        LocalFlagStore(str(path)).remember(enquiry_id, True)

        assert json.loads(path.read_text()) == {str(enquiry_id): True}
        assert LocalFlagStore(str(path)).is_flagged(enquiry_id) is True

    def test_invalid_file_starts_empty(self, tmp_path):
        path = tmp_path / "flags.json"
        path.write_text("{not json")

        assert LocalFlagStore(str(path)).flags == {}

    def test_reconcile_drops_confirmed_entries(self, flag_store):
        confirmed = make_enquiry(flagged_for_notification=True)
        pending = make_enquiry(flagged_for_notification=None)
        contradicted = make_enquiry(flagged_for_notification=False)
        for enquiry in (confirmed, pending, contradicted):
            flag_store.remember(enquiry.id, True)

        discarded = flag_store.reconcile([confirmed, pending, contradicted])

        assert discarded == 1
        assert set(flag_store.flags) == {str(pending.id), str(contradicted.id)}

    def test_reconcile_confirms_unflagging(self, flag_store):
        enquiry = make_enquiry(flagged_for_notification=False)
        flag_store.remember(enquiry.id, False)

        assert flag_store.reconcile([enquiry]) == 1
        assert flag_store.flags == {}


class TestConcurrentAccess:
    """The store is shared by every request thread"""

    def test_parallel_writers(self, tmp_path):
        path = tmp_path / "flags.json"
        store = LocalFlagStore(str(path))
        errors = []

        def write_many():
            try:
                for _ in range(200):
                    enquiry_id = uuid4()
                    store.remember(enquiry_id, True)
                    store.discard(enquiry_id)
                    store.remember(uuid4(), True)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=write_many) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(store.flags) == 800
        assert len(json.loads(path.read_text())) == 800

    def test_failed_write_keeps_previous_file(self, tmp_path, mocker):
        path = tmp_path / "flags.json"
        store = LocalFlagStore(str(path))
        first = uuid4()
        store.remember(first, True)
        mocker.patch("crm.services.flag_store.json.dump", side_effect=OSError("disk full"))

        with pytest.raises(OSError):
            store.remember(uuid4(), True)

        assert json.loads(path.read_text()) == {str(first): True}
        assert [p.name for p in tmp_path.iterdir()] == ["flags.json"]

    def test_single_shared_instance(self, mocker):
        mocker.patch.object(repositories, "_flag_store", None)
        seen = []

        threads = [threading.Thread(target=lambda: seen.append(repositories.get_flag_store())) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(store) for store in seen}) == 1
