from transsmart.domain.models.token import Token
from transsmart.domain.repository.token_repository import TokenRepository


class MemoryTokenRepository(TokenRepository):
    def __init__(self, token: Token | None = None):
        self.__token = token

        super().__init__()

    def get(self) -> Token | None:
        return self.__token

    def set(self, token: Token) -> None:
        self.__token = token

    def clear(self) -> None:
        self.__token = None
