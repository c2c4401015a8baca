from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PendingRename:
    """In-place name edit for one rendered row.

    ``<Return>`` and ``<FocusOut>`` both commit; only the first changed value
    is handed to the service, until the row is rebuilt.
    """

    subject_id: str
    original: str
    committed: bool = False

    def claim(self, new_name: str) -> bool:
        if self.committed or new_name.strip() == self.original:
            return False
        self.committed = True
        return True
