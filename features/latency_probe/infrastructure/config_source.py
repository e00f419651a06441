from __future__ import annotations

from pathlib import Path

from features.latency_probe.application.ports import ConfigSource
from features.latency_probe.domain.errors import ConfigLoadError
from features.latency_probe.domain.probing import RouterConfigDocument


_CONTENT_TYPES = {
    ".json": "application/json",
    ".yaml": "application/yaml",
    ".yml": "application/yaml",
}


class FileConfigSource(ConfigSource):
    def __init__(self, file_path: Path):
        self._file_path = file_path

    def load(self) -> RouterConfigDocument:
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigLoadError(f"cannot read config file: {exc}") from exc
        return RouterConfigDocument(
            path=self._file_path,
            text=text,
            content_type=_CONTENT_TYPES.get(self._file_path.suffix.lower()),
        )
