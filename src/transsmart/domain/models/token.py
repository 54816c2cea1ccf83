from datetime import (
    datetime,
    timedelta,
    timezone
)
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator
)

# The server hands out 24h tokens; expire locally five minutes earlier.
DEFAULT_LIFETIME = timedelta(hours=23, minutes=55)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def default_expiry() -> datetime:
    return utcnow() + DEFAULT_LIFETIME


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    value     : str = Field(repr=False)
    expires_at: datetime = Field(default_factory=default_expiry)

    @field_validator("expires_at")
    @classmethod
    def naive_means_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    def is_expired(self, now: datetime | None = None) -> bool:
        return as_utc(now or utcnow()) >= self.expires_at

    def remaining(self, now: datetime | None = None) -> timedelta:
        return self.expires_at - as_utc(now or utcnow())
