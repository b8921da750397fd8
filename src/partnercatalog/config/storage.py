"""Output location configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DEFAULT_OUTPUT_DIR: Final[str] = "output"
PARTNERS_FILENAME: Final[str] = "partners.json"
SOLUTIONS_FILENAME: Final[str] = "solutions.json"
JOINED_FILENAME: Final[str] = "partners_with_solutions.json"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    output_dir: Path

    def resolve_output_dir(self) -> Path:
        return self.output_dir.expanduser().resolve()

    def ensure_output_dir(self) -> Path:
        output_dir = self.resolve_output_dir()
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir

    def _path(self, filename: str, *, ensure: bool) -> Path:
        base = self.ensure_output_dir() if ensure else self.resolve_output_dir()
        return base / filename

    def partners_path(self, *, ensure: bool = True) -> Path:
        return self._path(PARTNERS_FILENAME, ensure=ensure)

    def solutions_path(self, *, ensure: bool = True) -> Path:
        return self._path(SOLUTIONS_FILENAME, ensure=ensure)

    def joined_path(self, *, ensure: bool = True) -> Path:
        return self._path(JOINED_FILENAME, ensure=ensure)


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("PARTNERCATALOG_OUTPUT_DIR")
    output_dir = Path(env_dir) if env_dir else Path.cwd() / DEFAULT_OUTPUT_DIR
    return StorageConfig(output_dir=output_dir)
