"""Game repositories: transactional save/load of whole games.

``save`` is an upsert of the full aggregate.  It either succeeds completely
or leaves the store exactly as it was and raises ``StorageError``.
``load`` returns None for unknown ids.
"""

from __future__ import annotations

import copy
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from extlife.exceptions import StorageError
from extlife.persistence.codec import game_from_dict, game_to_dict
from extlife.simulation.game import Game


class GameRepository(ABC):
    """Storage contract for games."""

    @abstractmethod
    def save(self, game: Game) -> int:
        """Insert or update ``game``; returns its id (assigned on first save)."""

    @abstractmethod
    def load(self, game_id: int) -> Game | None:
        """Return the stored game, or None if there is none with that id."""

    @abstractmethod
    def list_ids(self) -> list[int]:
        """Return the ids of all stored games, ascending."""

    @abstractmethod
    def delete(self, game_id: int) -> None:
        """Remove a stored game; unknown ids are ignored."""

    def _serialise(self, game: Game, game_id: int) -> dict[str, Any]:
        if game is None:
            raise ValueError("game must not be None")
        try:
            return game_to_dict(game, game_id=game_id)
        except Exception as exc:
            logger.error("[Storage] could not serialise game '{}': {}", game.name, exc)
            msg = f"Failed to save game '{game.name}'"
            raise StorageError(msg) from exc


class MemoryGameRepository(GameRepository):
    """Dict-backed repository for tests and short-lived runs.

    Stores deep copies of the serialised payload, so later mutation of a
    saved game never leaks into the store.
    """

    def __init__(self) -> None:
        self._data: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    def save(self, game: Game) -> int:
        if game is None:
            raise ValueError("game must not be None")
        game_id = game.game_id if game.game_id is not None else self._next_id
        payload = self._serialise(game, game_id)
        self._data[game_id] = copy.deepcopy(payload)
        self._next_id = max(self._next_id, game_id + 1)
        game.game_id = game_id
        logger.info("[Storage] saved game '{}' as id {}", game.name, game_id)
        return game_id

    def load(self, game_id: int) -> Game | None:
        payload = self._data.get(game_id)
        if payload is None:
            return None
        return game_from_dict(copy.deepcopy(payload))

    def list_ids(self) -> list[int]:
        return sorted(self._data)

    def delete(self, game_id: int) -> None:
        self._data.pop(game_id, None)


class YamlGameRepository(GameRepository):
    """One YAML file per game under ``root``.

    A save writes to a temporary file in the same directory and atomically
    replaces the target, so readers only ever see a complete game.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, game_id: int) -> Path:
        return self.root / f"game_{game_id:06d}.yaml"

    def list_ids(self) -> list[int]:
        ids = []
        for path in self.root.glob("game_*.yaml"):
            suffix = path.stem.removeprefix("game_")
            if suffix.isdigit():
                ids.append(int(suffix))
        return sorted(ids)

    def save(self, game: Game) -> int:
        if game is None:
            raise ValueError("game must not be None")
        game_id = game.game_id
        if game_id is None:
            game_id = max(self.list_ids(), default=0) + 1
        payload = self._serialise(game, game_id)

        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=".tmp_", suffix=".yaml")
        try:
            with os.fdopen(fd, "w") as f:
                yaml.safe_dump(payload, f, sort_keys=False)
            os.replace(tmp_name, self._path(game_id))
        except Exception as exc:
            Path(tmp_name).unlink(missing_ok=True)
            logger.exception("[Storage] rolled back save of game '{}'", game.name)
            msg = f"Failed to save game '{game.name}'"
            raise StorageError(msg) from exc

        game.game_id = game_id
        logger.info("[Storage] saved game '{}' to {}", game.name, self._path(game_id))
        return game_id

    def load(self, game_id: int) -> Game | None:
        path = self._path(game_id)
        if not path.exists():
            return None
        try:
            with path.open("r") as f:
                payload = yaml.safe_load(f)
            return game_from_dict(payload)
        except (OSError, yaml.YAMLError, ValueError) as exc:
            msg = f"Failed to load game {game_id} from {path}"
            raise StorageError(msg) from exc

    def delete(self, game_id: int) -> None:
        self._path(game_id).unlink(missing_ok=True)
