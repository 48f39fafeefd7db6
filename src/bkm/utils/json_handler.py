"""Reading and writing the JSON array files that back the repositories."""

import json
from pathlib import Path
from typing import Any, Dict, List


class JSONFileError(Exception):
    """JSON file processing error."""

    pass


def load_records(file_path: Path) -> List[Dict[str, Any]]:
    """Load a JSON array of objects from disk.

    A missing file is treated as an empty array.

    Args:
        file_path: Path to the JSON file

    Returns:
        List of raw records

    Raises:
        JSONFileError: If the file cannot be read or is not a JSON array of objects
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as e:
        raise JSONFileError(f"Failed to read {file_path}: {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise JSONFileError(f"Invalid JSON in {file_path}: {e}") from e

    if not isinstance(data, list):
        raise JSONFileError(f"Expected a JSON array in {file_path}")

    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise JSONFileError(f"Record {index} in {file_path} is not an object")

    return data


def save_records(file_path: Path, records: List[Dict[str, Any]]) -> None:
    """Overwrite the file with the given records.

    The file is written in place; there is no temp-file rename.

    Raises:
        JSONFileError: If file writing fails
    """
    try:
        content = json.dumps(records, indent=2, ensure_ascii=False)
        file_path.write_text(content + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        raise JSONFileError(f"Failed to write {file_path}: {e}") from e


def ensure_directory(directory: Path) -> None:
    """Create the directory and its parents if missing.

    Raises:
        JSONFileError: If directory creation fails
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise JSONFileError(f"Failed to create directory {directory}: {e}") from e
