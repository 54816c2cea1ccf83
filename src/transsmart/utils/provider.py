from functools import lru_cache

from transsmart.application.services.shipment_service import ShipmentService
from transsmart.config.settings import Settings
from transsmart.domain.repository.token_repository import TokenRepository
from transsmart.infra.client.transsmart_client import TranssmartClient
from transsmart.infra.persistence.token_repository_file import FileTokenRepository
from transsmart.infra.persistence.token_repository_memory import MemoryTokenRepository
from transsmart.observability.logger import setup_logging


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def configure_logging() -> None:
    settings = get_settings()

    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.SERVICE_NAME)


@lru_cache(maxsize=1)
def get_repository() -> TokenRepository:
    settings = get_settings()

    if settings.TS_TOKEN_STORE == "file":
        return FileTokenRepository(settings.TS_TOKENS_PATH)

    return MemoryTokenRepository()


@lru_cache(maxsize=1)
def get_client() -> TranssmartClient:
    return TranssmartClient.from_settings(get_settings(), get_repository())


def get_shipment_service() -> ShipmentService:
    return ShipmentService(get_client())
