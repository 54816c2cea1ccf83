"""Verb and path templates for every Transsmart v2 operation.

Paths are rendered with the configured account plus the operation's own
parameters; each parameter is quoted as a single path segment. In query
strings ``None`` values are dropped and booleans become ``1``/``0``;
sequences repeat the key.
"""

from __future__ import annotations

import urllib.parse
from dataclasses import dataclass, field
from typing import Any, Mapping

API_URL = "https://api.transsmart.com"
API_TEST_URL = "https://accept-api.transsmart.com"

RAW_JOB: Mapping[str, str] = {"rawJob": "true"}

# method suffix -> listsettings kind on the server
LIST_SETTINGS: dict[tuple[str, str], str] = {
    ("carriers", "carrier"): "carriers",
    ("costcenters", "costcenter"): "costCenters",
    ("incoterms", "incoterm"): "incoterms",
    ("mail_types", "mail_type"): "mailTypes",
    ("package_definitions", "package_definition"): "packages",
    ("service_level_times", "service_level_time"): "serviceLevelTimes",
    ("service_level_others", "service_level_other"): "serviceLevelOthers",
    ("booking_profiles", "booking_profile"): "bookingProfiles",
}


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (list, tuple)):
        return [_query_value(v) for v in value if v is not None]
    return value


def build_query(query: Mapping[str, Any] | None) -> str:
    """Encode ``query`` without the leading ``?``; empty input gives ``""``."""
    if not query:
        return ""

    params = {k: _query_value(v) for k, v in query.items() if v is not None}

    return urllib.parse.urlencode(params, doseq=True)


def with_query(path: str, query: Mapping[str, Any] | None) -> str:
    encoded = build_query(query)

    return f"{path}?{encoded}" if encoded else path


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    query: Mapping[str, str] = field(default_factory=dict)

    @property
    def has_body(self) -> bool:
        return self.method in ("POST", "PUT")

    def render(self, account: str, query: Mapping[str, Any] | None = None, **params: Any) -> str:
        segments = {
            name: urllib.parse.quote(str(value), safe="")
            for name, value in {"account": account, **params}.items()
        }

        return with_query(self.path.format(**segments), {**self.query, **(query or {})})


ENDPOINTS: dict[str, Endpoint] = {
    # shipments
    "book_shipment": Endpoint("POST", "/v2/shipments/{account}/{action}", RAW_JOB),
    "retrieve_shipment": Endpoint("GET", "/v2/shipments/{account}/{reference}"),
    "retrieve_shipments": Endpoint("GET", "/v2/shipments/{account}"),
    "delete_shipment": Endpoint("DELETE", "/v2/shipments/{account}/{reference}"),
    "get_shipment_manifest_list": Endpoint("GET", "/v2/shipments/{account}/manifest/list"),
    "manifest_shipments": Endpoint("GET", "/v2/shipments/{account}/manifest"),

    # rates, documents, statuses
    "calculate_rates": Endpoint("POST", "/v2/rates/{account}"),
    "print_document": Endpoint("GET", "/v2/prints/{account}/{reference}", RAW_JOB),
    "get_shipment_status": Endpoint("GET", "/v2/statuses/{account}/shipments/{reference}"),
    "get_shipments_statuses": Endpoint("GET", "/v2/statuses/{account}/shipments"),

    # addresses
    "get_addresses": Endpoint("GET", "/v2/addresses/{account}"),
    "get_address": Endpoint("GET", "/v2/addresses/{account}/{id}"),
    "create_address": Endpoint("POST", "/v2/addresses/{account}"),
    "update_address": Endpoint("PUT", "/v2/addresses/{account}/{id}"),
    "delete_address": Endpoint("DELETE", "/v2/addresses/{account}/{id}"),

    # pickup locations
    "get_pickup_locations": Endpoint("GET", "/v2/locations/{account}"),
}

for (_plural, _single), _kind in LIST_SETTINGS.items():
    ENDPOINTS[f"get_{_plural}"] = Endpoint("GET", f"/v2/accounts/{{account}}/listsettings/{_kind}")
    ENDPOINTS[f"get_{_single}"] = Endpoint("GET", f"/v2/accounts/{{account}}/listsettings/{_kind}/{{nr}}")
