"""
IO utilities for writing read results.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Tuple

from .provenance import stringify_location_ref
from .results import ReadLocationResult

logger = logging.getLogger(__name__)


def write_jsonl_file(data_list: List[Dict[str, Any]], output_path: Path) -> None:
    """Write list of dictionaries to JSONL file."""
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            for data in data_list:
                f.write(json.dumps(data, default=str) + '\n')
        logger.info(f"Wrote {len(data_list)} records to {output_path}")
    except Exception as e:
        logger.error(f"Error writing to {output_path}: {e}")
        raise


def serialize_read_result(read_result: ReadLocationResult) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Convert a read result into JSON-serializable records.
    
    Returns:
        Tuple of (entity records, error records)
    """
    entity_records = [
        {"location": stringify_location_ref(item.location), "entity": item.entity}
        for item in read_result.entities
    ]
    error_records = [
        {
            "location": stringify_location_ref(item.location),
            "error": type(item.error).__name__,
            "message": str(item.error),
        }
        for item in read_result.errors
    ]
    return entity_records, error_records


def write_read_result(read_result: ReadLocationResult, output_dir: Path) -> Tuple[Path, Path]:
    """Write ``entities.jsonl`` and ``errors.jsonl`` into output_dir."""
    entity_records, error_records = serialize_read_result(read_result)
    entities_path = Path(output_dir) / "entities.jsonl"
    errors_path = Path(output_dir) / "errors.jsonl"
    write_jsonl_file(entity_records, entities_path)
    write_jsonl_file(error_records, errors_path)
    return entities_path, errors_path
