"""Key-value stores for client-side analysis state."""

from pathlib import Path
from typing import Optional, Protocol, Sequence

from .constants import LAST_COMPETITION_KEY
from .logging_config import get_logger
from .utils import load_json_safe, save_json

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    """String key-value persistence, e.g. browser local storage."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


def namespaced_key(purpose: str, competition_id: str) -> str:
    """Key for per-competition state, e.g. pick_1st_42."""
    return f'{purpose}_{competition_id}'


class MemoryStore:
    """Dict-backed store, for tests and single-process sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStore:
    """
    Store backed by a single JSON object on disk.

    The file is re-read on every get so that edits made by another process
    between sessions are picked up. A missing or corrupt file reads as empty.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        data = load_json_safe(self.path, default={})
        if not isinstance(data, dict):
            logger.warning(f'Ignoring non-object store file: {self.path}')
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        save_json(self.path, data)


def remember_competition(store: KeyValueStore, competition_id: str) -> None:
    """Save the competition the analyst last selected."""
    store.set(LAST_COMPETITION_KEY, str(competition_id))


def resolve_active_competition(
    store: KeyValueStore, competition_ids: Sequence[str]
) -> Optional[str]:
    """
    Pick the competition to open with.

    The remembered competition is used if it is still available; otherwise
    the first available one (competitions are listed newest first).

    Returns:
        Competition id, or None if there are no competitions
    """
    available = [str(c) for c in competition_ids]
    if not available:
        return None
    saved = store.get(LAST_COMPETITION_KEY)
    if saved is not None and saved in available:
        return saved
    return available[0]
