"""Translation documents: where they live and how they are read."""

import asyncio
import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Optional
from urllib.parse import unquote, urlparse

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from app.core.config import settings
from app.services.bible.exceptions import TranslationFormatError, VersionLoadError

logger = structlog.get_logger(__name__)

_executor = ThreadPoolExecutor(max_workers=2)


class TranslationBook(BaseModel):
    """One book of a translation document.

    ``chapters[c][v]`` is the text of chapter ``c + 1``, verse ``v + 1``.
    """

    name: str
    abbrev: Optional[str] = None
    chapters: list[list[str]]


_translation_adapter = TypeAdapter(list[TranslationBook])


def builtin_location(version: str) -> str:
    """Location of a built-in version under the configured data root."""
    return f"{settings.bible_data_url.rstrip('/')}/{version}.json"


def parse_translation(version: str, payload: Any) -> list[TranslationBook]:
    """Validate a decoded translation document."""
    try:
        return _translation_adapter.validate_python(payload)
    except ValidationError as e:
        raise TranslationFormatError(version, f"invalid translation document ({e.error_count()} errors)") from e


def _read_local(path: Path) -> Any:
    with open(path, encoding="utf-8-sig") as f:
        return json.load(f)


class TranslationFetcher:
    """Reads translation documents from HTTP(S) URLs or local paths."""

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout if timeout is not None else settings.fetch_timeout_seconds
        self._transport = transport

    async def fetch(self, location: str, version: str = "") -> Any:
        """Fetch and decode the JSON document at ``location``."""
        parsed = urlparse(location)

        if parsed.scheme in ("http", "https"):
            logger.info("translation_fetch_started", version=version, url=location)
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout,
                    follow_redirects=True,
                    transport=self._transport,
                ) as client:
                    response = await client.get(location)
                    response.raise_for_status()
                    return response.json()
            except httpx.HTTPStatusError as e:
                raise VersionLoadError(version, f"source returned {e.response.status_code}") from e
            except httpx.HTTPError as e:
                raise VersionLoadError(version, f"source unreachable: {e}") from e
            except ValueError as e:
                raise TranslationFormatError(version, "source is not valid JSON") from e

        path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(location)
        logger.info("translation_read_started", version=version, path=str(path))

        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(_executor, _read_local, path)
        except FileNotFoundError as e:
            raise VersionLoadError(version, f"version {version} not found") from e
        except OSError as e:
            raise VersionLoadError(version, f"cannot read {path}: {e}") from e
        except ValueError as e:
            raise TranslationFormatError(version, "source is not valid JSON") from e
