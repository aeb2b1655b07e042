"""Tests for log browser and ingestion endpoints."""

import uuid
from datetime import timedelta

import pytest
from httpx import AsyncClient

from interface_monitor.core.datetime_utils import to_utc_isoformat, utc_now
from interface_monitor.models import LogStatus
from interface_monitor.services.log_store import MAX_PAGE

pytestmark = pytest.mark.asyncio


class TestCreateLog:
    """Tests for POST /api/logs."""

    async def test_create_log(self, client: AsyncClient, log_payload):
        """Should create a log and return it with an id and timestamps."""
        response = await client.post("/api/logs", json=log_payload())

        assert response.status_code == 201
        data = response.json()
        assert uuid.UUID(data["id"])
        assert data["interfaceName"] == "Workday HR Data Export"
        assert data["integrationKey"] == "WD-EXPORT-003"
        assert data["status"] == "success"
        assert data["recordsProcessed"] == 312
        assert data["formattedDuration"] == "4.2s"
        assert data["createdAt"] is not None
        assert data["updatedAt"] is not None
        assert data["timestamp"] is not None

    async def test_create_applies_defaults(self, client: AsyncClient, log_payload):
        """Optional fields should fall back to their defaults."""
        body = log_payload(severity=None, duration=None, recordsProcessed=None, metadata=None)

        response = await client.post("/api/logs", json=body)

        assert response.status_code == 201
        data = response.json()
        assert data["severity"] == "medium"
        assert data["duration"] == 0
        assert data["recordsProcessed"] == 0
        assert data["metadata"] is None
        assert data["formattedDuration"] == "0ms"

    async def test_round_trip(self, client: AsyncClient, log_payload):
        """Fetching a created log should return the same user-supplied fields."""
        body = log_payload(timestamp="2026-03-01T08:30:00.000Z", status="warning", severity="high")
        created = (await client.post("/api/logs", json=body)).json()

        response = await client.get(f"/api/logs/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        for key, value in body.items():
            assert data[key] == value, key

    async def test_timezone_aware_timestamp_stored_as_utc(self, client: AsyncClient, log_payload):
        response = await client.post(
            "/api/logs", json=log_payload(timestamp="2026-03-01T10:30:00+02:00")
        )

        assert response.status_code == 201
        assert response.json()["timestamp"] == "2026-03-01T08:30:00.000Z"

    async def test_reject_invalid_status(self, client: AsyncClient, log_payload):
        """Should reject statuses outside the enumeration."""
        response = await client.post("/api/logs", json=log_payload(status="exploded"))

        assert response.status_code == 400
        assert "status" in response.json()["error"]

    async def test_reject_invalid_severity(self, client: AsyncClient, log_payload):
        response = await client.post("/api/logs", json=log_payload(severity="urgent"))

        assert response.status_code == 400
        assert "severity" in response.json()["error"]

    async def test_reject_missing_required_field(self, client: AsyncClient, log_payload):
        body = log_payload()
        del body["interfaceName"]

        response = await client.post("/api/logs", json=body)

        assert response.status_code == 400
        assert "interfaceName" in response.json()["error"]

    async def test_reject_negative_duration(self, client: AsyncClient, log_payload):
        response = await client.post("/api/logs", json=log_payload(duration=-1))

        assert response.status_code == 400
        assert "duration" in response.json()["error"]

    async def test_reject_oversized_counters(self, client: AsyncClient, log_payload):
        """Values beyond the integer column range are a validation error, not a crash."""
        response = await client.post("/api/logs", json=log_payload(duration=10**20))

        assert response.status_code == 400
        assert "duration" in response.json()["error"]

        response = await client.post("/api/logs", json=log_payload(recordsProcessed=2**31))

        assert response.status_code == 400
        assert "recordsProcessed" in response.json()["error"]

    async def test_accept_largest_counters(self, client: AsyncClient, log_payload):
        response = await client.post(
            "/api/logs", json=log_payload(duration=2**31 - 1, recordsProcessed=2**31 - 1)
        )

        assert response.status_code == 201
        assert response.json()["duration"] == 2**31 - 1

    async def test_utc_timestamp_echoed_as_utc(self, client: AsyncClient, log_payload):
        """A "Z" timestamp should come back as the same instant, marked UTC."""
        created = (
            await client.post("/api/logs", json=log_payload(timestamp="2026-01-01T00:00:00Z"))
        ).json()

        data = (await client.get(f"/api/logs/{created['id']}")).json()

        assert data["timestamp"] == "2026-01-01T00:00:00.000Z"
        assert data["createdAt"].endswith("Z")
        assert data["updatedAt"].endswith("Z")

    async def test_reject_non_object_body(self, client: AsyncClient):
        response = await client.post("/api/logs", json=["not", "an", "object"])

        assert response.status_code == 400
        assert "error" in response.json()


class TestBulkCreate:
    """Tests for POST /api/logs/bulk."""

    async def test_bulk_create(self, client: AsyncClient, log_payload):
        body = [log_payload(), log_payload(status="failed", message="Timeout")]

        response = await client.post("/api/logs/bulk", json=body)

        assert response.status_code == 201
        data = response.json()
        assert data["insertedCount"] == 2
        assert len(data["ids"]) == 2

    async def test_bulk_rejects_whole_batch(self, client: AsyncClient, log_payload):
        """One invalid entry should reject the batch and write nothing."""
        body = [log_payload(), log_payload(status="bogus")]

        response = await client.post("/api/logs/bulk", json=body)

        assert response.status_code == 400
        assert response.json()["error"].startswith("logs[1]")

        listing = await client.get("/api/logs")
        assert listing.json()["totalCount"] == 0

    async def test_bulk_requires_array(self, client: AsyncClient, log_payload):
        response = await client.post("/api/logs/bulk", json=log_payload())

        assert response.status_code == 400


class TestGetLog:
    """Tests for GET /api/logs/{id}."""

    async def test_get_log(self, client: AsyncClient, log_factory):
        log = await log_factory(metadata={"jobId": "JOB-9"})

        response = await client.get(f"/api/logs/{log.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(log.id)
        assert data["metadata"] == {"jobId": "JOB-9"}

    async def test_get_unknown_log(self, client: AsyncClient):
        response = await client.get(f"/api/logs/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"error": "Log not found"}

    async def test_get_malformed_id(self, client: AsyncClient):
        """A malformed id should be treated as not found."""
        response = await client.get("/api/logs/not-a-uuid")

        assert response.status_code == 404


class TestReplaceLog:
    """Tests for PUT /api/logs/{id}."""

    async def test_replace_running_with_success(self, client: AsyncClient, log_factory, log_payload):
        log = await log_factory(status=LogStatus.RUNNING, message="Processing batch 3 of 5")
        original_timestamp = log.timestamp

        body = log_payload(
            interfaceName=log.interface_name,
            integrationKey=log.integration_key,
            status="success",
            message="Processed 5 of 5 batches",
            severity=None,
        )
        response = await client.put(f"/api/logs/{log.id}", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(log.id)
        assert data["status"] == "success"
        assert data["message"] == "Processed 5 of 5 batches"
        # Omitted optional fields reset to defaults
        assert data["severity"] == "medium"
        # Omitted timestamp keeps the stored one
        assert data["timestamp"] == to_utc_isoformat(original_timestamp)

    async def test_replace_unknown_log(self, client: AsyncClient, log_payload):
        response = await client.put(f"/api/logs/{uuid.uuid4()}", json=log_payload())

        assert response.status_code == 404

    async def test_replace_invalid_payload(self, client: AsyncClient, log_factory, log_payload):
        log = await log_factory()

        response = await client.put(f"/api/logs/{log.id}", json=log_payload(status="done"))

        assert response.status_code == 400


class TestDeleteLog:
    """Tests for DELETE /api/logs/{id}."""

    async def test_delete_log(self, client: AsyncClient, log_factory):
        log = await log_factory()

        response = await client.delete(f"/api/logs/{log.id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Log deleted successfully"}
        assert (await client.get(f"/api/logs/{log.id}")).status_code == 404

    async def test_delete_unknown_log(self, client: AsyncClient):
        response = await client.delete(f"/api/logs/{uuid.uuid4()}")

        assert response.status_code == 404


class TestListLogs:
    """Tests for GET /api/logs."""

    async def test_pagination_covers_all_records(self, client: AsyncClient, log_factory):
        """Pages should concatenate to every record once, newest first."""
        for i in range(7):
            await log_factory(minutes_ago=i * 5)

        first = (await client.get("/api/logs", params={"limit": 3})).json()
        assert first["totalCount"] == 7
        assert first["totalPages"] == 3
        assert first["currentPage"] == 1

        seen = []
        for page in range(1, first["totalPages"] + 1):
            data = (await client.get("/api/logs", params={"page": page, "limit": 3})).json()
            seen.extend(data["logs"])

        ids = [log["id"] for log in seen]
        assert len(ids) == 7
        assert len(set(ids)) == 7
        timestamps = [log["timestamp"] for log in seen]
        assert timestamps == sorted(timestamps, reverse=True)

    async def test_invalid_paging_is_normalized(self, client: AsyncClient, log_factory):
        await log_factory()

        response = await client.get("/api/logs", params={"page": 0, "limit": -5})

        assert response.status_code == 200
        data = response.json()
        assert data["currentPage"] == 1
        assert data["totalPages"] == 1
        assert len(data["logs"]) == 1

    async def test_huge_page_returns_empty_page(self, client: AsyncClient, log_factory):
        await log_factory()

        response = await client.get("/api/logs", params={"page": 10**18, "limit": 200})

        assert response.status_code == 200
        data = response.json()
        assert data["logs"] == []
        assert data["totalCount"] == 1
        assert data["currentPage"] == MAX_PAGE

    async def test_empty_listing(self, client: AsyncClient):
        data = (await client.get("/api/logs")).json()

        assert data == {"logs": [], "totalPages": 0, "currentPage": 1, "totalCount": 0}

    async def test_non_numeric_page(self, client: AsyncClient):
        response = await client.get("/api/logs", params={"page": "abc"})

        assert response.status_code == 400
        assert "page" in response.json()["error"]

    async def test_filter_by_status(self, client: AsyncClient, log_factory):
        await log_factory(status=LogStatus.SUCCESS)
        await log_factory(status=LogStatus.FAILED)
        await log_factory(status=LogStatus.FAILED)

        data = (await client.get("/api/logs", params={"status": "failed"})).json()

        assert data["totalCount"] == 2
        assert all(log["status"] == "failed" for log in data["logs"])

    async def test_filter_by_unknown_status(self, client: AsyncClient):
        response = await client.get("/api/logs", params={"status": "exploded"})

        assert response.status_code == 400

    async def test_interface_name_substring_case_insensitive(
        self, client: AsyncClient, log_factory
    ):
        await log_factory(interface_name="Workday HR Data Export")
        await log_factory(interface_name="AD User Provisioning")

        data = (await client.get("/api/logs", params={"interfaceName": "workday"})).json()

        assert data["totalCount"] == 1
        assert data["logs"][0]["interfaceName"] == "Workday HR Data Export"

    async def test_substring_filter_escapes_wildcards(self, client: AsyncClient, log_factory):
        """LIKE wildcards in user input should match literally."""
        await log_factory(interface_name="Payroll 100% Sync")
        await log_factory(interface_name="Payroll Sync")

        data = (await client.get("/api/logs", params={"interfaceName": "%"})).json()

        assert data["totalCount"] == 1
        assert data["logs"][0]["interfaceName"] == "Payroll 100% Sync"

    async def test_search_matches_name_key_or_message(self, client: AsyncClient, log_factory):
        await log_factory(interface_name="SAP Payroll", integration_key="PAY-1", message="ok")
        await log_factory(interface_name="Workday", integration_key="WD-SAP-2", message="ok")
        await log_factory(interface_name="AD Sync", integration_key="AD-1", message="Pushed to sap gateway")
        await log_factory(interface_name="Benefits", integration_key="BEN-1", message="done")

        data = (await client.get("/api/logs", params={"search": "SAP"})).json()

        assert data["totalCount"] == 3
        assert {log["integrationKey"] for log in data["logs"]} == {"PAY-1", "WD-SAP-2", "AD-1"}

    async def test_date_bounds_are_inclusive(self, client: AsyncClient, log_factory):
        base = utc_now().replace(microsecond=0) - timedelta(days=3)
        await log_factory(timestamp=base)
        await log_factory(timestamp=base + timedelta(hours=1))
        await log_factory(timestamp=base + timedelta(hours=2))

        data = (
            await client.get(
                "/api/logs",
                params={
                    "startDate": base.isoformat(),
                    "endDate": (base + timedelta(hours=1)).isoformat(),
                },
            )
        ).json()

        assert data["totalCount"] == 2

    async def test_malformed_date_rejected(self, client: AsyncClient):
        response = await client.get("/api/logs", params={"startDate": "yesterday"})

        assert response.status_code == 400
        assert "startDate" in response.json()["error"]


class TestFilterValues:
    """Tests for GET /api/logs/filters/values."""

    async def test_distinct_sorted_values(self, client: AsyncClient, log_factory):
        await log_factory(interface_name="Workday HR Data Export", integration_key="WD-EXPORT-003")
        await log_factory(
            interface_name="AD User Provisioning",
            integration_key="AD-USER-004",
            status=LogStatus.FAILED,
        )
        await log_factory(interface_name="Workday HR Data Export", integration_key="WD-EXPORT-003")

        response = await client.get("/api/logs/filters/values")

        assert response.status_code == 200
        assert response.json() == {
            "interfaceNames": ["AD User Provisioning", "Workday HR Data Export"],
            "integrationKeys": ["AD-USER-004", "WD-EXPORT-003"],
            "statuses": ["failed", "success"],
            "severities": ["medium"],
        }


class TestStoreFailures:
    """Store failures should surface as 500 without internal detail."""

    async def test_store_error_returns_500(self, client: AsyncClient, monkeypatch):
        from interface_monitor.core.errors import StoreError
        from interface_monitor.services import log_store

        async def broken_find_logs(*args, **kwargs):
            raise StoreError("Database error during find_logs")

        monkeypatch.setattr(log_store, "find_logs", broken_find_logs)

        response = await client.get("/api/logs")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
