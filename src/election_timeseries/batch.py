"""
Processing of multiple input files, one at a time.

A failure for one file (invalid data, malformed JSON, I/O problems) is logged
and does not stop the processing of the remaining files.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Tuple, Union

logger = logging.getLogger(__name__)

# ValidationError and ParseError are ValueErrors
RECOVERABLE_ERRORS = (ValueError, OSError)


@dataclass
class BatchResult:
    processed: List[Path] = field(default_factory=list)
    failed: List[Tuple[Path, Exception]] = field(default_factory=list)

    @property
    def all_succeeded(self) -> bool:
        return not self.failed


def json_files(path: Union[str, Path]) -> List[Path]:
    """The JSON file itself, or the *.json files of a directory sorted by name."""
    path = Path(path)
    if path.is_file():
        return [path]
    if not path.is_dir():
        raise FileNotFoundError(f"Not a file or directory: {path}")
    return sorted(p for p in path.iterdir() if p.is_file() and p.suffix == ".json")


def process_files(
    paths: List[Path], process: Callable[[Path], None]
) -> BatchResult:
    """
    Apply `process` to each file in turn.

    Args:
        paths: Input files, processed in the given order
        process: Function handling a single file

    Returns:
        BatchResult listing processed and failed files
    """
    result = BatchResult()

    for path in paths:
        logger.info(f"Processing file '{path}'")
        try:
            process(path)
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"Failed to process '{path}': {e}")
            result.failed.append((path, e))
            continue
        result.processed.append(path)

    logger.info(
        f"Processed {len(result.processed)} files, {len(result.failed)} failed"
    )
    return result
