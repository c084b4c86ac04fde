# iotworkbench/core/filesystem.py
"""Async filesystem helpers used for project scaffolding."""
from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class FileUtility:
    @staticmethod
    async def directory_exists(path: Path) -> bool:
        return path.is_dir()

    @staticmethod
    async def file_exists(path: Path) -> bool:
        return path.is_file()

    @staticmethod
    async def mkdir_recursively(path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    @staticmethod
    async def remove_recursively(path: Path) -> None:
        if not path.exists():
            return
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink()
        logger.info("Removed %s", path)

    @staticmethod
    async def read_file(path: Path) -> str:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    @staticmethod
    async def write_file(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.debug("Wrote file: %s", path)
        return path

    @staticmethod
    async def read_json(path: Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    @staticmethod
    async def write_json(path: Path, data: Any, indent: int = 4) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent)
        logger.debug("Wrote JSON: %s", path)
        return path
