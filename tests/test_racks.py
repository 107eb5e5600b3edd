"""Tests for rack health sources."""

import httpx
import pytest

from rack_monitor.errors import ConfigurationError, RackInventoryError, UnknownServerError
from rack_monitor.models import Server
from rack_monitor.racks import InventoryRack, StaticRack


class TestStaticRack:
    """Tests for in-memory racks."""

    @pytest.fixture
    def rack(self):
        return StaticRack(
            "RACK01",
            {Server("TEST001"): 1, Server("TEST002"): 2},
            {Server("TEST001"): 0.5},
        )

    def test_get_unit_for_server(self, rack):
        assert rack.get_unit_for_server(Server("TEST002")) == 2

    def test_unknown_server(self, rack):
        with pytest.raises(UnknownServerError) as exc_info:
            rack.get_unit_for_server(Server("MISSING"))
        assert exc_info.value.rack is rack
        assert exc_info.value.server == Server("MISSING")

    def test_get_health_returns_copy(self, rack):
        health = rack.get_health()
        health[Server("TEST002")] = 0.1
        assert Server("TEST002") not in rack.get_health()

    def test_update_health(self, rack):
        rack.update_health({Server("TEST002"): 0.99})
        assert rack.get_health() == {Server("TEST002"): 0.99}

    def test_duplicate_unit_rejected(self):
        with pytest.raises(ConfigurationError):
            StaticRack("RACK01", {Server("TEST001"): 1, Server("TEST002"): 1})

    @pytest.mark.parametrize("unit", [0, -3, True, "1"])
    def test_invalid_unit_rejected(self, unit):
        with pytest.raises(ConfigurationError):
            StaticRack("RACK01", {Server("TEST001"): unit})

    def test_racks_compare_by_identity(self):
        a = StaticRack("RACK01", {Server("TEST001"): 1})
        b = StaticRack("RACK01", {Server("TEST001"): 1})
        assert a == a
        assert a != b


class TestInventoryRack:
    """Tests for inventory-backed racks."""

    def _rack(self, handler) -> InventoryRack:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return InventoryRack(
            "RACK02",
            {Server("TEST0101"): 1, Server("TEST0102"): 2},
            "http://inventory.local/api/",
            client=client,
        )

    def test_get_health(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/racks/RACK02/health"
            return httpx.Response(200, json={"servers": {"TEST0101": 0.95, "TEST0102": "0.4"}})

        health = self._rack(handler).get_health()
        assert health == {Server("TEST0101"): 0.95, Server("TEST0102"): 0.4}

    def test_http_error(self):
        rack = self._rack(lambda request: httpx.Response(503))
        with pytest.raises(RackInventoryError, match="503"):
            rack.get_health()

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RackInventoryError):
            self._rack(handler).get_health()

    def test_out_of_range_score(self):
        rack = self._rack(lambda request: httpx.Response(200, json={"servers": {"TEST0101": 1.5}}))
        with pytest.raises(RackInventoryError, match="outside"):
            rack.get_health()

    @pytest.mark.parametrize("body", [
        {"servers": None},
        {"servers": ["TEST0101"]},
        {"racks": {}},
        ["TEST0101"],
    ])
    def test_malformed_body(self, body):
        rack = self._rack(lambda request: httpx.Response(200, json=body))
        with pytest.raises(RackInventoryError, match="malformed"):
            rack.get_health()

    def test_non_numeric_score(self):
        rack = self._rack(lambda request: httpx.Response(200, json={"servers": {"TEST0101": "ok"}}))
        with pytest.raises(RackInventoryError, match="non-numeric"):
            rack.get_health()
