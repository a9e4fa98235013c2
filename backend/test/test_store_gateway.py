"""
Tests for the table gateway
"""

import pytest
from sqlalchemy.exc import OperationalError

from conftest import TODAY
from crm.errors import RecordNotFound, StoreError, WriteFailure


def customer_row(**override):
    row = {"name": "Deshmukh Farms", "contact_number": "9822000001", "location": "Satara"}
    row.update(override)
    return row


class TestInsert:
    def test_insert_returns_stored_row(self, gateway):
        row = gateway.insert("customers", customer_row())

        assert row["id"] is not None
        assert row["created_at"] is not None
        assert row["meeting_person"] is None
        assert row["contact_number"] == "9822000001"

    def test_enum_columns_come_back_as_values(self, gateway):
        customer = gateway.insert("customers", customer_row())

        row = gateway.insert(
            "enquiries",
            {
                "date": TODAY,
                "segment": "Agri",
                "customer_id": customer["id"],
                "customer_name": customer["name"],
                "contact_number": customer["contact_number"],
                "status": "Quote",
                "assigned_to": "Amit",
            },
        )

        assert row["status"] == "Quote"
        assert type(row["status"]) is str
        assert row["segment"] == "Agri"

    def test_duplicate_contact_number_is_write_failure(self, gateway):
        gateway.insert("customers", customer_row())

        with pytest.raises(WriteFailure):
            gateway.insert("customers", customer_row(name="Someone Else"))

        # session is usable after the rollback
        assert len(gateway.select("customers")) == 1

    def test_unknown_table(self, gateway):
        with pytest.raises(ValueError):
            gateway.insert("invoices", {})


class TestSelect:
    def test_equality_filters_and_order(self, gateway):
        gateway.insert("customers", customer_row(name="Zeta", contact_number="1", location="Pune"))
        gateway.insert("customers", customer_row(name="Alpha", contact_number="2", location="Pune"))
        gateway.insert("customers", customer_row(name="Mid", contact_number="3", location="Nagpur"))

        rows = gateway.select("customers", {"location": "Pune"}, order_by="name")
        assert [r["name"] for r in rows] == ["Alpha", "Zeta"]

        rows = gateway.select("customers", order_by="name", descending=True)
        assert [r["name"] for r in rows] == ["Zeta", "Mid", "Alpha"]

    def test_select_one_miss(self, gateway):
        assert gateway.select_one("customers", {"contact_number": "404"}) is None

    def test_read_failure_is_store_error(self, gateway, db, mocker):
        mocker.patch.object(db, "query", side_effect=OperationalError("SELECT", {}, Exception("connection lost")))

        with pytest.raises(StoreError):
            gateway.select("customers")
        with pytest.raises(StoreError):
            gateway.select_one("customers", {"contact_number": "1"})


class TestUpdateDelete:
    def test_update_patch(self, gateway):
        row = gateway.insert("customers", customer_row())

        updated = gateway.update("customers", row["id"], {"meeting_person": "Mr. Pawar"})

        assert updated["meeting_person"] == "Mr. Pawar"
        assert updated["name"] == row["name"]

    def test_update_missing_row(self, gateway, faker):
        with pytest.raises(RecordNotFound) as exc_info:
            gateway.update("customers", faker.uuid4(cast_to=None), {"name": "x"})

        assert exc_info.value.table == "customers"

    def test_delete(self, gateway):
        row = gateway.insert("tasks", {"title": "Call back", "assigned_to": "Amit", "status": "Pending"})

        assert gateway.delete("tasks", row["id"]) is True
        assert gateway.select("tasks") == []

    def test_delete_missing_row(self, gateway, faker):
        with pytest.raises(RecordNotFound):
            gateway.delete("tasks", faker.uuid4(cast_to=None))
