"""Curated fixture list, served from a remote URL or a local JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from icehub.ingestion.http import ProviderError, get_json
from icehub.ingestion.schema import CuratedPayload

logger = logging.getLogger(__name__)


class CuratedJsonSource:
    """Pre-curated fixtures for a known tournament year.

    A remote URL wins over the local file. The URL may contain a "{season}"
    placeholder; the local file is <data_dir>/olympics<season>.json.
    """

    def __init__(self, url: str | None = None, data_dir: str | Path | None = None) -> None:
        self._url = url
        self._data_dir = Path(data_dir) if data_dir else None

    @property
    def configured(self) -> bool:
        return bool(self._url or self._data_dir)

    def _local_path(self, season: str) -> Path | None:
        if self._data_dir is None:
            return None
        return self._data_dir / f"olympics{season}.json"

    def _load(self, season: str) -> Any:
        if self._url:
            return get_json(self._url.replace("{season}", season))
        path = self._local_path(season)
        if path is None or not path.is_file():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ProviderError(f"Invalid curated fixture file {path}: {exc}") from exc

    def fetch(self, season: str) -> list[CuratedPayload]:
        document = self._load(season)
        if document is None:
            return []
        if not isinstance(document, list):
            logger.warning(
                "Curated fixtures for season=%s is not a list (got %s)",
                season,
                type(document).__name__,
            )
            return []
        return [CuratedPayload(data=item) for item in document if isinstance(item, dict)]
