"""
Flat-file document storage.

This module provides the persistence adapter used by the state store.
Every operation acts on a whole JSON document; there is no partial or
append mode. Blocking file calls run in a worker thread so request
handlers only suspend at I/O boundaries.
"""

import asyncio
import json
import logging
import os
import tempfile
from typing import Any

from app.config import get_settings
from app.core.exceptions import (
    DocumentNotFoundError,
    DocumentReadError,
    DocumentWriteError,
)

logger = logging.getLogger(__name__)
settings = get_settings()


def dump_document(data: Any) -> str:
    """Serialize a record set to document text."""
    return json.dumps(data, indent=settings.storage.JSON_INDENT, ensure_ascii=False)


def parse_document(text: str) -> Any:
    """
    Parse document text.

    Raises:
        ValueError: If the text is not valid JSON (json.JSONDecodeError).
    """
    return json.loads(text)


def _read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        raise DocumentNotFoundError(path, "Document not found")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(path, f"Could not read document ({e})")


def _write_text(path: str, text: str) -> None:
    tmp_name = None
    replaced = False
    try:
        dirpath = os.path.dirname(os.path.abspath(path))
        os.makedirs(dirpath, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", delete=False, dir=dirpath, encoding="utf-8", suffix=".tmp"
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        replaced = True
    except (OSError, ValueError) as e:
        # ValueError covers text that cannot be encoded, e.g. lone surrogates
        raise DocumentWriteError(path, f"Could not write document ({e})")
    finally:
        if tmp_name and not replaced and os.path.exists(tmp_name):
            os.unlink(tmp_name)


class JsonFileAdapter:
    """
    Persistence adapter backed by files on the local disk.

    Writes go to a sibling temp file that replaces the target, so a
    document is either fully rewritten or left as it was.
    """

    async def read_document(self, path: str) -> str:
        """
        Read a whole document as text.

        Raises:
            DocumentNotFoundError: The file does not exist.
            DocumentReadError: The file could not be read.
        """
        return await asyncio.to_thread(_read_text, path)

    async def write_document(self, path: str, text: str) -> None:
        """
        Replace a whole document.

        Raises:
            DocumentWriteError: The file could not be written.
        """
        await asyncio.to_thread(_write_text, path, text)

    async def ensure_exists(self, path: str, default_content: str) -> None:
        """Write default_content only if the document does not exist yet."""
        if await asyncio.to_thread(os.path.exists, path):
            return
        logger.info(f"Creating {path} with default content")
        await self.write_document(path, default_content)
