#!/usr/bin/env python3
"""
Whole-document JSON storage for the movie catalog

The catalog is one JSON array, rewritten in full on every save.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List

from moviecat.errors import LoadError, SaveError

logger = logging.getLogger(__name__)


class JsonCatalogStore:
    """Read and write the catalog document at a fixed path"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> List[Dict]:
        """Load the catalog document as a list of record dicts"""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            raise LoadError(f"Could not load catalog from {self.path}: {e}") from e

        if not isinstance(records, list):
            raise LoadError(
                f"Catalog at {self.path} must be a JSON array, got {type(records).__name__}"
            )

        logger.debug(f"Loaded catalog with {len(records)} entries from {self.path}")
        return records

    def write(self, records: List[Dict]):
        """Overwrite the catalog document"""
        try:
            # Serialize before opening: a bad value must not truncate the file
            content = json.dumps(records, indent=2, ensure_ascii=False)

            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(content)
                f.write('\n')
        except (OSError, TypeError, ValueError) as e:
            raise SaveError(f"Could not save catalog to {self.path}: {e}") from e

        logger.debug(f"Saved catalog with {len(records)} entries to {self.path}")

    def exists(self) -> bool:
        return self.path.exists()

    def initialize(self) -> bool:
        """Write an empty catalog if no document exists. Returns True if one was created."""
        if self.exists():
            return False
        self.write([])
        logger.info(f"Created empty catalog at {self.path}")
        return True
