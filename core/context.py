from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.auth import AuthClient
from core.backend import Backend
from core.cache import QueryCache


@dataclass
class AppContext:
    """What every view receives: the user's backend handle and query cache."""
    backend: Backend
    cache: QueryCache

    @property
    def auth(self) -> AuthClient:
        return self.backend.auth

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self.auth.get_user()
