"""AccessControl — owner-only авторизация административных операций.

Используется ConfigStore (update fee / claim amount) и путём вывода
средств из казны (withdraw_excess_funds).
"""

from typing import Callable, Optional

from src.core.domain.result import Err, ErrorCode


class AccessControl:
    """Guard: сравнение caller с текущим owner.

    Owner читается через callable, а не копируется: источник истины
    остаётся в ConfigStore.
    """

    def __init__(self, owner_source: Callable[[], str]):
        self._owner_source = owner_source

    @property
    def owner(self) -> str:
        return self._owner_source()

    def is_owner(self, caller: str) -> bool:
        return caller == self._owner_source()

    def authorize(self, caller: str, operation: str = "") -> Optional[Err]:
        """Проверка прав caller.

        Returns:
            None если caller — owner, иначе Err(UNAUTHORIZED)
        """
        if self.is_owner(caller):
            return None
        return Err(
            ErrorCode.UNAUTHORIZED,
            reason=f"caller {caller} is not owner" + (f" ({operation})" if operation else ""),
        )
