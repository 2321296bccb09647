"""
Persist the aggregated extension index to disk.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

import aiofiles

from extindex.domain.models import ExtensionInfo

logger = logging.getLogger(__name__)


def render_index(extensions: List[ExtensionInfo]) -> str:
    """Render index entries as pretty-printed JSON (2-space indent)."""
    return json.dumps(
        [extension.to_index_entry() for extension in extensions],
        indent=2,
        ensure_ascii=False,
    )


async def write_index(extensions: List[ExtensionInfo], output_path: Path) -> Path:
    """
    Write the index, replacing any previous file.

    The content goes to a temp file next to the target first and is then
    renamed over it, so a crash mid-write never leaves a truncated index.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_name(f"{output_path.name}.tmp")
    content = render_index(extensions)

    try:
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(content)
        tmp_path.replace(output_path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.debug(f"Index written to {output_path}")
    return output_path
