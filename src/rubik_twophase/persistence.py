"""
persistence.py — pruning tables on disk
=======================================

Each table is stored as a flat file of unsigned bytes with a fixed length
(2187, 2048, 40320, 40320). All four must be present and well-sized to be
used; otherwise the whole set is regenerated and saved again. Neither a read
nor a write failure aborts a solve.

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .config import PRUNING_TABLE_FILES, PRUNING_TABLE_SIZES
from .pruning import TABLE_NAMES, PruningTables, generate_pruning_tables
from .transitions import TransitionTables

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

PathLike = Union[str, Path]


def table_paths(directory: PathLike):
    directory = Path(directory)
    return {name: directory / PRUNING_TABLE_FILES[name] for name in TABLE_NAMES}


def load_pruning_tables(directory: PathLike) -> Optional[PruningTables]:
    """
    Returns the persisted tables, or None when any file is missing,
    unreadable or of the wrong size.
    """
    paths = table_paths(directory)
    missing = [str(p) for p in paths.values() if not p.is_file()]
    if missing:
        logger.debug("Pruning tables missing: %s", missing)
        return None

    tables = {}
    try:
        for name, path in paths.items():
            data = np.fromfile(path, dtype=np.uint8)
            if data.size != PRUNING_TABLE_SIZES[name]:
                raise ValueError(f"{path} holds {data.size} bytes, expected {PRUNING_TABLE_SIZES[name]}")
            tables[name] = data
    except (OSError, ValueError) as e:
        logger.warning("Error loading pruning tables: %s", e)
        return None
    return PruningTables.from_mapping(tables)


def save_pruning_tables(pruning: PruningTables, directory: PathLike) -> bool:
    """Write all four tables. Returns False (after logging) on failure."""
    try:
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        for name, path in table_paths(directory).items():
            getattr(pruning, name).tofile(path)
    except OSError as e:
        logger.error("Error saving pruning tables: %s", e)
        return False
    logger.info("Pruning tables saved to %s", directory)
    return True


def load_or_generate(transitions: TransitionTables, directory: PathLike) -> PruningTables:
    t0 = time.perf_counter()
    pruning = load_pruning_tables(directory)
    if pruning is not None:
        logger.info("Loaded pruning tables from %s in %.3fs", directory, time.perf_counter() - t0)
        return pruning

    logger.info("Generating pruning tables...")
    pruning = generate_pruning_tables(transitions)
    save_pruning_tables(pruning, directory)
    return pruning
