from pathlib import Path
from pydantic import StringConstraints
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict
)
from typing import (
    Annotated,
    Literal
)

from transsmart.domain.endpoints import (
    API_TEST_URL,
    API_URL
)

ROOT = Path(__file__).resolve().parents[3]
ENV_PATH = ROOT / ".env"
TOKENS_PATH = ROOT / ".tokens.json"


class Settings(BaseSettings):
    # credentials are passed to basic auth verbatim
    TS_USERNAME: Annotated[str, StringConstraints(min_length=1)]
    TS_PASSWORD: Annotated[str, StringConstraints(min_length=1)]
    TS_ACCOUNT : Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

    TS_TEST_MODE: bool = False

    TS_API_URL     : str = API_URL
    TS_API_TEST_URL: str = API_TEST_URL

    TS_TOKEN_STORE: Literal["memory", "file"] = "memory"
    TS_TOKENS_PATH: str = str(TOKENS_PATH)

    LOG_LEVEL : str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    SERVICE_NAME: str = "transsmart-client"

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )
