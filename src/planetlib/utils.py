import logging
from datetime import datetime, timezone

from . import config

logger = logging.getLogger(__name__)


def split_labels(raw):
    """Split a comma-separated label field into trimmed, non-empty labels."""
    if not isinstance(raw, str):
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def primary_label(raw):
    """Return the first label of a comma-separated field (empty string if none)."""
    labels = split_labels(raw)
    return labels[0] if labels else ""


def _parse_non_negative_int(raw):
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    if not isinstance(raw, str):
        return None
    stripped = raw.strip()
    if not config.INTEGER_PATTERN.fullmatch(stripped):
        return None
    return int(stripped, 10)


def parse_population(raw):
    """Return population as a non-negative int, or the "unknown" sentinel."""
    if raw == config.UNKNOWN_POPULATION:
        return config.UNKNOWN_POPULATION
    value = _parse_non_negative_int(raw)
    if value is None:
        logger.warning("[!] Unparseable population %r. Treating as %s.", raw, config.UNKNOWN_POPULATION)
        return config.UNKNOWN_POPULATION
    return value


def parse_diameter(raw):
    """Return diameter as a non-negative int, or None if unknown/unparseable."""
    if raw is None or raw == config.UNKNOWN_DIAMETER:
        return None
    return _parse_non_negative_int(raw)


def parse_iso8601(raw_ts):
    """Parse API timestamps while stripping milliseconds and enforcing UTC."""
    if not raw_ts or not isinstance(raw_ts, str):
        return None
    normalized = raw_ts[:-1] + "+00:00" if raw_ts.endswith("Z") else raw_ts
    try:
        dt = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.replace(microsecond=0)


def format_edited(raw_ts):
    """Render an ISO-8601 timestamp as the fixed UTC display string."""
    dt = parse_iso8601(raw_ts)
    if dt is None:
        logger.debug("Leaving unparseable edited timestamp as-is: %r", raw_ts)
        return raw_ts
    return dt.astimezone(timezone.utc).strftime(config.EDITED_DISPLAY_FORMAT)
