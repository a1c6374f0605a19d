"""
Loading vertex coordinate lookups from disk.

Lookups map vertex ID to a (longitude, latitude) pair. Supported files:

- JSON object: ``{"28": [-0.09, 51.505], ...}``
- JSON list: ``[{"id": 28, "lon": -0.09, "lat": 51.505}, ...]`` (``lng`` also accepted)
- CSV with header ``id,lon,lat`` (``lng`` also accepted)
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class LookupLoadError(ValueError):
    """The lookup file could not be read or has an unsupported format."""


def _to_entry(vertex_id: Any, lon: Any, lat: Any) -> Optional[Tuple[int, Tuple[float, float]]]:
    """Validate one lookup entry, returning None if any part is malformed."""
    try:
        key = int(vertex_id)
        lon_f = float(lon)
        lat_f = float(lat)
    except (TypeError, ValueError):
        return None
    if not (-90.0 <= lat_f <= 90.0 and -180.0 <= lon_f <= 180.0):
        return None
    return key, (lon_f, lat_f)


def _record_lon(record: Dict[str, Any]) -> Any:
    return record.get("lon", record.get("lng"))


def _from_json(data: Any) -> Dict[int, Tuple[float, float]]:
    lookup = {}
    skipped = 0

    if isinstance(data, dict):
        for key, value in data.items():
            entry = None
            if isinstance(value, (list, tuple)) and len(value) >= 2:
                entry = _to_entry(key, value[0], value[1])
            if entry is None:
                skipped += 1
                continue
            lookup[entry[0]] = entry[1]
    elif isinstance(data, list):
        for record in data:
            entry = None
            if isinstance(record, dict):
                entry = _to_entry(record.get("id"), _record_lon(record), record.get("lat"))
            if entry is None:
                skipped += 1
                continue
            lookup[entry[0]] = entry[1]
    else:
        raise LookupLoadError("JSON lookup must be an object or a list of records")

    if skipped:
        logger.warning(f"Skipped {skipped} malformed lookup entries")
    return lookup


def _from_csv(handle) -> Dict[int, Tuple[float, float]]:
    reader = csv.DictReader(handle)
    fields = {name.strip().lower() for name in (reader.fieldnames or [])}
    if "id" not in fields or "lat" not in fields or not ({"lon", "lng"} & fields):
        raise LookupLoadError("CSV lookup needs an 'id,lon,lat' header")

    lookup = {}
    skipped = 0
    for row in reader:
        record = {k.strip().lower(): v for k, v in row.items() if k}
        entry = _to_entry(record.get("id"), _record_lon(record), record.get("lat"))
        if entry is None:
            skipped += 1
            continue
        lookup[entry[0]] = entry[1]

    if skipped:
        logger.warning(f"Skipped {skipped} malformed lookup rows")
    return lookup


def load_lookup(path: Union[str, Path]) -> Dict[int, Tuple[float, float]]:
    """
    Load a vertex coordinate lookup.

    Args:
        path: Path to a .json or .csv lookup file

    Returns:
        Dict of vertex ID to (lon, lat)

    Raises:
        LookupLoadError: If the file is missing, unreadable or unsupported
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in (".json", ".csv"):
        raise LookupLoadError(f"Unsupported lookup format: {path.suffix or '(none)'}. Use .json or .csv")

    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            if suffix == ".json":
                lookup = _from_json(json.load(f))
            else:
                lookup = _from_csv(f)
    except OSError as e:
        raise LookupLoadError(f"Could not read lookup file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise LookupLoadError(f"Lookup file {path} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise LookupLoadError(f"Invalid JSON in lookup file {path}: {e}") from e

    logger.info(f"Loaded {len(lookup)} vertex coordinates from {path}")
    return lookup
