from abc import (
    ABC,
    abstractmethod
)

from transsmart.domain.models.token import Token


class TokenRepository(ABC):
    @abstractmethod
    def get(self) -> Token | None:
        ...

    @abstractmethod
    def set(self, token: Token) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...
