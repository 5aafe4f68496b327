"""
Daemon API

Outbound calls an analysis module makes while it runs:
- report / report_incident: encode an incident and hand it to the host
- parameter: look up a daemon parameter
- http: ask the host to perform an HTTP request
- query: run a SQL query on the host side
- assert_that: record a failed condition with the host

Usage:
    daemon = Daemon(host)
    if tx.gas_used > daemon.parameter("gas_limit").as_number():
        daemon.report_incident(IncidentSeverity.ALERT, "Gas spike", tx_hash=tx.tx_hash)
"""

import json
import logging
from typing import Any, Dict, List, Optional

from chainprobe.config import DEFAULT_CONFIG, SdkConfig
from chainprobe.errors import HostCallError
from chainprobe.host.base import Host
from chainprobe.http import HttpMethod, HttpRequest, HttpResponse
from chainprobe.incident import Incident, IncidentData, IncidentSeverity


class DaemonParameter:
    """Raw parameter text with typed views."""

    def __init__(self, key: str, value: str):
        self.key = key
        self.value = value

    def as_string(self) -> str:
        return self.value

    def as_boolean(self) -> bool:
        return self.value == "true"

    def as_number(self) -> Optional[float]:
        try:
            return float(self.value)
        except ValueError:
            return None

    def __repr__(self) -> str:
        return f"DaemonParameter({self.key}={self.value!r})"


class Daemon:
    """Host-backed daemon services."""

    def __init__(self, host: Host, config: Optional[SdkConfig] = None):
        self.host = host
        self.config = config or DEFAULT_CONFIG
        self.logger = logging.getLogger("Daemon")

        self.reported = 0

    # =========================================================================
    # Incidents
    # =========================================================================

    def report(self, incident: Incident) -> None:
        """Encode the whole incident, then emit it in one call."""
        text = incident.to_json(report_empty_data=self.config.report_empty_data)
        self.host.emit_incident(text)
        self.reported += 1
        self.logger.info(f"Reported {incident.severity.wire_name} incident: {incident.message}")

    def report_incident(
        self,
        severity: IncidentSeverity,
        message: str,
        data: Optional[IncidentData] = None,
        address: str = "",
        tx_hash: str = "",
    ) -> Incident:
        incident = Incident(severity, message, data=data, address=address, tx_hash=tx_hash)
        self.report(incident)
        return incident

    # =========================================================================
    # Host Services
    # =========================================================================

    def parameter(self, key: str) -> DaemonParameter:
        return DaemonParameter(key, self.host.parameter(key))

    def http(
        self,
        method: HttpMethod,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> HttpResponse:
        request = HttpRequest(method, url, headers=dict(headers or {}), body=body)
        self.logger.debug(f"HTTP {method.value} {url}")
        return HttpResponse.from_json(self.host.http(request.to_json()))

    def query(self, sql: str) -> List[Dict[str, Any]]:
        text = self.host.query(sql)
        try:
            rows = json.loads(text)
        except ValueError as e:
            raise HostCallError(f"malformed query result: {e}") from e

        if not isinstance(rows, list):
            raise HostCallError(f"query result is not a list: {type(rows).__name__}")
        return rows

    def assert_that(self, condition: bool, message: Optional[str] = None) -> None:
        if not condition:
            self.logger.warning(f"Assertion failed: {message or 'no message'}")
        self.host.assert_condition(bool(condition), message or "Assertion failed")
