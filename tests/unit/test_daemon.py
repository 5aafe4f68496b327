"""Unit tests for the Daemon API over InMemoryHost."""

import pytest

from chainprobe.config import SdkConfig
from chainprobe.daemon import Daemon, DaemonParameter
from chainprobe.errors import HostCallError
from chainprobe.http import HttpMethod
from chainprobe.host import Host
from chainprobe.incident import Incident, IncidentDataStruct, IncidentSeverity


class TestReporting:
    """Incidents reach the host fully encoded."""

    def test_report_incident(self, host):
        """report_incident builds, encodes and emits in one call."""
        daemon = Daemon(host)
        daemon.report_incident(IncidentSeverity.ALERT, "Hello, I am a mine turtle!", tx_hash="txHash")

        assert host.incidents == [
            '{"severity":"alert","message":"Hello, I am a mine turtle!","tx_hash":"txHash"}'
        ]
        assert host.calls["emit_incident"] == 1
        assert daemon.reported == 1

    def test_report_prebuilt_incident(self, host):
        data = IncidentDataStruct()
        data.add_number("gas_used", 21_000)

        Daemon(host).report(Incident(IncidentSeverity.WARNING, "High gas", data))

        assert host.decoded_incidents() == [{
            "severity": "warning",
            "message": "High gas",
            "data": {"gas_used": 21000.0},
        }]

    def test_report_empty_data_disabled(self, host):
        """The daemon honours report_empty_data from its config."""
        daemon = Daemon(host, SdkConfig(report_empty_data=False))
        daemon.report_incident(IncidentSeverity.INFO, "m", IncidentDataStruct())
        assert host.incidents == ['{"severity":"info","message":"m"}']


class TestParameters:
    """Daemon parameters and their typed views."""

    def test_as_string(self, host):
        host.parameters["threshold"] = "1.5"
        assert Daemon(host).parameter("threshold").as_string() == "1.5"

    @pytest.mark.parametrize("raw,expected", [("true", True), ("True", False), ("1", False), ("", False)])
    def test_as_boolean(self, raw, expected):
        """Only the exact text "true" is true."""
        assert DaemonParameter("flag", raw).as_boolean() is expected

    @pytest.mark.parametrize("raw,expected", [("1.5", 1.5), ("42", 42.0), ("-3", -3.0), ("abc", None), ("", None)])
    def test_as_number(self, raw, expected):
        """Unparsable text yields None."""
        assert DaemonParameter("n", raw).as_number() == expected

    def test_missing_parameter(self, host):
        with pytest.raises(HostCallError):
            Daemon(host).parameter("absent")


class TestHostServices:
    """HTTP, query and assertions."""

    def test_http_round_trip(self, host):
        """The request reaches the host handler; its response is decoded."""
        host.http_handler = lambda request: {
            "status": 201,
            "error": None,
            "headers": {"location": "/alerts/1"},
            "body": [111, 107],
        }

        response = Daemon(host).http(
            HttpMethod.PUT, "https://example.com/alerts", headers={"x-key": "k"}, body="payload",
        )

        assert response.status() == 201
        assert response.body() == b"ok"
        assert host.http_log[0].request == {
            "method": "PUT",
            "url": "https://example.com/alerts",
            "body": "payload",
            "headers": {"x-key": "k"},
        }

    def test_http_without_handler(self, host):
        """Hosts without HTTP answer with status 0 and an error."""
        response = Daemon(host).http(HttpMethod.GET, "https://example.com")
        assert response.status() == 0
        assert response.error()

    def test_query(self, host):
        host.query_results["SELECT 1 AS one"] = [{"one": 1}]
        daemon = Daemon(host)

        assert daemon.query("SELECT 1 AS one") == [{"one": 1}]
        assert daemon.query("SELECT nothing") == []

    def test_assert_that(self, host):
        """Failed conditions are recorded; passing ones are still forwarded."""
        daemon = Daemon(host)
        daemon.assert_that(True)
        daemon.assert_that(False)
        daemon.assert_that(1 > 2, "one is not greater than two")

        assert host.failed_assertions == ["Assertion failed", "one is not greater than two"]
        assert host.calls["assert"] == 3


class CoreOnlyHost(Host):
    """Host that serves data but none of the daemon services."""

    def fetch_collection(self, kind):
        return 0

    def fetch_argument_value(self, seq):
        return 0

    def parse_input(self, abi, base64_data):
        return 0

    def read_memory(self, offset, length):
        return b""

    def emit_incident(self, text):
        pass


class TestUnsupportedServices:
    """Missing host services surface as HostCallError."""

    def test_http(self):
        with pytest.raises(HostCallError, match="http"):
            Daemon(CoreOnlyHost()).http(HttpMethod.GET, "https://example.com")

    def test_parameter(self):
        with pytest.raises(HostCallError, match="parameters"):
            Daemon(CoreOnlyHost()).parameter("threshold")

    def test_query(self):
        with pytest.raises(HostCallError, match="queries"):
            Daemon(CoreOnlyHost()).query("SELECT 1")

    def test_assert_that(self):
        with pytest.raises(HostCallError, match="assertions"):
            Daemon(CoreOnlyHost()).assert_that(True)
