import json

from pathlib import Path

from transsmart.domain.models.token import Token
from transsmart.domain.repository.token_repository import TokenRepository


class FileTokenRepository(TokenRepository):
    def __init__(self, path: str | Path):
        self.path = Path(path)

        super().__init__()

    def get(self) -> Token | None:
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))

            return Token(**data)
        except (OSError, ValueError, TypeError):
            # unreadable or stale format: behave as if no token was cached
            return None

    def set(self, token: Token) -> None:
        self.path.write_text(
            json.dumps(token.model_dump(mode="json"), ensure_ascii=False, indent=2),
            encoding="utf-8"
        )

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
