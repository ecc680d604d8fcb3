from __future__ import annotations

import os
from typing import Iterable, Iterator, List, Optional, Tuple


MAX_RECENT_FILES = 16


class RecentFiles:
    """Bounded most-recently-used list of file paths.

    Entries are compared by exact string equality, most recent first, at most
    ``MAX_RECENT_FILES`` long. Paths that no longer exist are kept; they are
    only hidden from :meth:`get_recent`.
    """

    def __init__(self, paths: Optional[Iterable[str]] = None) -> None:
        self._paths: List[str] = []
        for path in paths or ():
            if path not in self._paths:
                self._paths.append(path)
        del self._paths[MAX_RECENT_FILES:]

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._paths)

    def add(self, path: str) -> None:
        """Move ``path`` to the front, inserting it if it is new."""
        try:
            idx = self._paths.index(path)
        except ValueError:
            self._paths.insert(0, path)
            del self._paths[MAX_RECENT_FILES:]
            return

        if idx != 0:
            del self._paths[idx]
            self._paths.insert(0, path)

    def get_recent(self) -> List[str]:
        """Absolute paths of the entries that exist and are readable.

        Relative entries are prefixed with the working directory but not
        normalized, so ``..`` and ``.`` components are kept.
        """
        cwd = os.getcwd()
        return [
            path if os.path.isabs(path) else os.path.join(cwd, path)
            for path in self._paths
            if os.path.exists(path) and os.access(path, os.R_OK)
        ]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecentFiles):
            return NotImplemented
        return self._paths == other._paths

    def __repr__(self) -> str:
        return f"RecentFiles({self._paths!r})"
