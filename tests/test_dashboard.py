"""Dashboard summary and its partial-failure policy."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from app.exceptions import RemoteOperationError
from app.services.dashboard_service import get_dashboard_summary
from conftest import AUTH, make_gateway

COUNTS = {
    ("vehicles", "status", "AVAILABLE"): 7,
    ("drivers", "status", "ACTIVE"): 5,
    ("trips", "stage", "DISPATCHED"): 3,
    ("trips", "stage", "DRAFT"): 2,
}


def count_with_failures(*failing_tables):
    async def _count(table, column, value):
        if (table, column, value) in failing_tables:
            raise RemoteOperationError("relation does not exist")
        return COUNTS[(table, column, value)]
    return _count


class TestDashboardService:
    @pytest.mark.asyncio
    async def test_all_counts_resolved(self):
        gateway = make_gateway()
        gateway.count.side_effect = count_with_failures()
        summary = await get_dashboard_summary(gateway)
        assert summary == {"availableVehicles": 7, "availableDrivers": 5, "activeTrips": 3, "pendingCargo": 2}
        assert gateway.count.await_count == 4

    @pytest.mark.asyncio
    async def test_failed_count_reads_zero(self):
        gateway = make_gateway()
        gateway.count.side_effect = count_with_failures(("vehicles", "status", "AVAILABLE"))
        summary = await get_dashboard_summary(gateway)
        assert summary == {"availableVehicles": 0, "availableDrivers": 5, "activeTrips": 3, "pendingCargo": 2}

    @pytest.mark.asyncio
    async def test_every_count_failing_still_returns_shape(self):
        gateway = make_gateway()
        gateway.count.side_effect = count_with_failures(*COUNTS)
        summary = await get_dashboard_summary(gateway)
        assert summary == {"availableVehicles": 0, "availableDrivers": 0, "activeTrips": 0, "pendingCargo": 0}

    @pytest.mark.asyncio
    async def test_null_count_reads_zero(self):
        gateway = make_gateway()
        gateway.count.return_value = None
        summary = await get_dashboard_summary(gateway)
        assert set(summary.values()) == {0}


class TestDashboardRoute:
    def test_available_vehicles_failure_still_200(self, client, gateway):
        gateway.count.side_effect = count_with_failures(("vehicles", "status", "AVAILABLE"))
        resp = client.get("/api/dashboard", headers=AUTH)
        assert resp.status_code == 200
        assert resp.json() == {"availableVehicles": 0, "availableDrivers": 5, "activeTrips": 3, "pendingCargo": 2}

    def test_any_role_may_read(self, client, gateway):
        gateway.get_profile_role.return_value = "SAFETY_OFFICER"
        gateway.count.side_effect = count_with_failures()
        resp = client.get("/api/dashboard", headers=AUTH)
        assert resp.status_code == 200
        gateway.get_profile_role.assert_not_called()
