import httpx
import json
import threading

from typing import (
    Any,
    Mapping
)

from transsmart.config.settings import Settings
from transsmart.domain.endpoints import (
    API_TEST_URL,
    API_URL,
    ENDPOINTS
)
from transsmart.domain.errors import (
    LoginFailed,
    RequestFailed
)
from transsmart.domain.models.token import Token
from transsmart.domain.repository.token_repository import TokenRepository
from transsmart.infra.persistence.token_repository_memory import MemoryTokenRepository
from transsmart.observability.logger import get_logger

TIMEOUT = 20
JSON_CONTENT_TYPE = "application/json;charset=UTF-8"
BODY_METHODS = ("POST", "PUT")

log = get_logger(__name__)

Query = Mapping[str, Any] | None


def _transport_message(e: httpx.RequestError) -> str:
    return str(e) or repr(e)


class TranssmartClient:
    """Transsmart API v2 client.

    A bearer token is obtained through ``GET /login`` with basic auth and kept
    in ``repository`` until it expires; every call made while the token is
    missing or expired logs in first. Logins are serialized so concurrent
    callers share a single exchange.
    """

    def __init__(
        self,
        username: str,
        password: str,
        account: str,
        test_mode: bool = False,
        repository: TokenRepository | None = None,
        *,
        api_url: str = API_URL,
        api_test_url: str = API_TEST_URL,
        transport: httpx.BaseTransport | None = None,
    ):
        self.__username = username
        self.__password = password
        self.__account = account
        self.__api_url = api_url.rstrip("/")
        self.__api_test_url = api_test_url.rstrip("/")
        self.__transport = transport
        self.__lock = threading.RLock()
        self.__test_mode = bool(test_mode)

        self.repository = repository or MemoryTokenRepository()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        repository: TokenRepository | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> "TranssmartClient":
        return cls(
            settings.TS_USERNAME,
            settings.TS_PASSWORD,
            settings.TS_ACCOUNT,
            settings.TS_TEST_MODE,
            repository,
            api_url=settings.TS_API_URL,
            api_test_url=settings.TS_API_TEST_URL,
            transport=transport,
        )

    @property
    def username(self) -> str:
        return self.__username

    @property
    def account(self) -> str:
        return self.__account

    @property
    def test_mode(self) -> bool:
        return self.__test_mode

    @test_mode.setter
    def test_mode(self, test_mode: bool) -> None:
        with self.__lock:
            if bool(test_mode) != self.__test_mode:
                # tokens are issued per environment
                self.repository.clear()

            self.__test_mode = bool(test_mode)

    def set_test_mode(self, test_mode: bool = False) -> None:
        self.test_mode = test_mode

    @property
    def base_url(self) -> str:
        return self.__api_test_url if self.__test_mode else self.__api_url

    @property
    def token(self) -> Token | None:
        return self.repository.get()

    @token.setter
    def token(self, token: Token) -> None:
        with self.__lock:
            self.repository.set(token)

    def __http(self, **kwargs: Any) -> httpx.Client:
        return httpx.Client(timeout=TIMEOUT, follow_redirects=True, transport=self.__transport, **kwargs)

    def login(self) -> Token:
        with self.__lock:
            url = f"{self.base_url}/login"

            try:
                # Certificate checks are off for the login exchange only; see DESIGN.md.
                with self.__http(auth=(self.__username, self.__password), verify=False) as c:
                    r = c.get(url)
                    r.raise_for_status()
            except httpx.HTTPStatusError as e:
                log.error("transsmart.login.failed", url=url, status=e.response.status_code)

                raise LoginFailed(e.response.text, e.response.status_code) from e
            except httpx.RequestError as e:
                log.error("transsmart.login.failed", url=url, error=_transport_message(e))

                raise LoginFailed(_transport_message(e)) from e

            payload = r.json()
            value = payload.get("token") if isinstance(payload, dict) else None

            if not isinstance(value, str) or not value:
                log.error("transsmart.login.failed", url=url, status=r.status_code, error="no token in response")

                raise LoginFailed(r.text, r.status_code)

            token = Token(value=value)

            self.repository.set(token)

            log.info(
                "transsmart.login.success",
                account=self.__account,
                test_mode=self.__test_mode,
                expires_at=token.expires_at.isoformat(),
            )

            return token

    def valid_token(self) -> Token:
        token = self.repository.get()

        if token is not None and not token.is_expired():
            return token

        with self.__lock:
            # another caller may have refreshed while this one waited
            token = self.repository.get()

            if token is None or token.is_expired():
                log.info("transsmart.token.refresh", reason="missing" if token is None else "expired")

                token = self.login()

            return token

    def request(self, method: str, path: str, body: Any = None) -> Any:
        token = self.valid_token()

        method = method.upper()
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {token.value}"}
        content = None

        if method in BODY_METHODS:
            headers["Content-Type"] = JSON_CONTENT_TYPE
            content = json.dumps(body, ensure_ascii=False).encode("utf-8")

        try:
            with self.__http() as c:
                r = c.request(method, url, headers=headers, content=content)
                r.raise_for_status()
        except httpx.HTTPStatusError as e:
            log.error("transsmart.request.failed", method=method, path=path, status=e.response.status_code)

            raise RequestFailed(e.response.text, e.response.status_code) from e
        except httpx.RequestError as e:
            log.error("transsmart.request.failed", method=method, path=path, error=_transport_message(e))

            raise RequestFailed(_transport_message(e)) from e

        log.debug("transsmart.request", method=method, path=path, status=r.status_code)

        return r.json()

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, body: Any) -> Any:
        return self.request("POST", path, body)

    def put(self, path: str, body: Any) -> Any:
        return self.request("PUT", path, body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def call(self, name: str, body: Any = None, query: Query = None, **params: Any) -> Any:
        endpoint = ENDPOINTS[name]

        if endpoint.has_body and body is None:
            raise ValueError(f"{name} requires a request body")

        return self.request(endpoint.method, endpoint.render(self.__account, query, **params), body)

    # shipments

    def book_shipment(self, data: Any, action: str = "BOOK") -> Any:
        return self.call("book_shipment", data, action=action)

    def retrieve_shipment(self, reference: str) -> Any:
        return self.call("retrieve_shipment", reference=reference)

    def retrieve_shipments(self, query: Query = None) -> Any:
        return self.call("retrieve_shipments", query=query)

    def delete_shipment(self, reference: str) -> Any:
        return self.call("delete_shipment", reference=reference)

    def get_shipment_manifest_list(self, query: Query = None) -> Any:
        return self.call("get_shipment_manifest_list", query=query)

    def manifest_shipments(self, query: Query = None) -> Any:
        return self.call("manifest_shipments", query=query)

    # rates, documents, statuses

    def calculate_rates(self, data: Any, query: Query = None) -> Any:
        return self.call("calculate_rates", data, query=query)

    def print_document(self, reference: str) -> Any:
        return self.call("print_document", reference=reference)

    def get_shipment_status(self, reference: str) -> Any:
        return self.call("get_shipment_status", reference=reference)

    def get_shipments_statuses(self, query: Query = None) -> Any:
        return self.call("get_shipments_statuses", query=query)

    # addresses

    def get_addresses(self) -> Any:
        return self.call("get_addresses")

    def get_address(self, id: str) -> Any:
        return self.call("get_address", id=id)

    def create_address(self, data: Any) -> Any:
        return self.call("create_address", data)

    def update_address(self, id: str, data: Any) -> Any:
        return self.call("update_address", data, id=id)

    def delete_address(self, id: str) -> Any:
        return self.call("delete_address", id=id)

    # reference data

    def get_carriers(self) -> Any:
        return self.call("get_carriers")

    def get_carrier(self, nr: str) -> Any:
        return self.call("get_carrier", nr=nr)

    def get_costcenters(self) -> Any:
        return self.call("get_costcenters")

    def get_costcenter(self, nr: str) -> Any:
        return self.call("get_costcenter", nr=nr)

    def get_incoterms(self) -> Any:
        return self.call("get_incoterms")

    def get_incoterm(self, nr: str) -> Any:
        return self.call("get_incoterm", nr=nr)

    def get_mail_types(self) -> Any:
        return self.call("get_mail_types")

    def get_mail_type(self, nr: str) -> Any:
        return self.call("get_mail_type", nr=nr)

    def get_package_definitions(self) -> Any:
        return self.call("get_package_definitions")

    def get_package_definition(self, nr: str) -> Any:
        return self.call("get_package_definition", nr=nr)

    def get_service_level_times(self) -> Any:
        return self.call("get_service_level_times")

    def get_service_level_time(self, nr: str) -> Any:
        return self.call("get_service_level_time", nr=nr)

    def get_service_level_others(self) -> Any:
        return self.call("get_service_level_others")

    def get_service_level_other(self, nr: str) -> Any:
        return self.call("get_service_level_other", nr=nr)

    def get_booking_profiles(self) -> Any:
        return self.call("get_booking_profiles")

    def get_booking_profile(self, nr: str) -> Any:
        return self.call("get_booking_profile", nr=nr)

    # pickup locations

    def get_pickup_locations(self, query: Query = None) -> Any:
        return self.call("get_pickup_locations", query=query)
