"""
Key-value credential storage for the UI. The aggregation core never reads it.
"""

from typing import MutableMapping, Optional

USERNAME_KEY = "username"
TOKEN_KEY = "token"
EMAIL_KEY = "email"


class CredentialStore:
    """
    Wraps any mutable mapping (``st.session_state`` in the app, a dict in tests)
    under a key prefix so ``clear()`` only drops our own entries.
    """

    KEYS = (USERNAME_KEY, TOKEN_KEY, EMAIL_KEY)

    def __init__(self, storage: MutableMapping, prefix: str = "credentials.") -> None:
        self._storage = storage
        self._prefix = prefix

    def get(self, key: str) -> Optional[str]:
        return self._storage.get(self._prefix + key)

    def set(self, key: str, value: str) -> None:
        self._storage[self._prefix + key] = value

    def clear(self) -> None:
        for key in self.KEYS:
            self._storage.pop(self._prefix + key, None)

    def save(self, username: str, token: str) -> None:
        # 이메일은 저장하지 않음
        self.clear()
        self.set(USERNAME_KEY, username)
        self.set(TOKEN_KEY, token)
