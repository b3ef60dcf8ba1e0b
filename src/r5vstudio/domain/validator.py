from __future__ import annotations

"""
Configuration Validation Service.

Normalizes configuration dictionaries coming from disk or the CLI. Handles
type coercion, range clamping and default value injection so the services
always receive well-typed parameters.
"""

import logging
from typing import Any, Dict, List, Tuple

from r5vstudio.domain.config import get_default_config
from r5vstudio.domain.constants import MAX_COMPRESSION_LEVEL, MIN_COMPRESSION_LEVEL
from r5vstudio.infra.logging.config import LEVEL_BY_NAME

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on type or range errors instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    merged["tree_max_depth"] = _as_int_in_range(
        merged.get("tree_max_depth"), defaults["tree_max_depth"],
        "tree_max_depth", 0, None, warnings, strict,
    )
    merged["compression_level"] = _as_int_in_range(
        merged.get("compression_level"), defaults["compression_level"],
        "compression_level", MIN_COMPRESSION_LEVEL, MAX_COMPRESSION_LEVEL, warnings, strict,
    )
    merged["save_log_file"] = _as_bool(
        merged.get("save_log_file"), defaults["save_log_file"], "save_log_file", warnings, strict
    )
    merged["locale"] = _as_str(merged.get("locale"), defaults["locale"], "locale", warnings, strict)
    merged["log_level"] = _normalize_level(
        _as_str(merged.get("log_level"), defaults["log_level"], "log_level", warnings, strict),
        defaults["log_level"], warnings, strict,
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "si", "sí"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int_in_range(
        value: Any,
        fallback: int,
        field: str,
        minimum: int,
        maximum: Any,
        warnings: List[str],
        strict: bool,
) -> int:
    """Coerce to int and clamp into [minimum, maximum]; maximum may be None."""
    if value is None:
        return fallback

    number: Any = value
    # bool is an int subclass but never a meaningful depth or level
    if isinstance(value, bool) or not isinstance(value, int):
        if strict:
            raise TypeError(f"Invalid field '{field}': expected int, received {type(value).__name__}.")
        try:
            number = int(str(value).strip())
        except ValueError:
            warnings.append(f"Invalid field '{field}': cannot parse '{value}' as int. Using fallback.")
            return fallback
        warnings.append(f"Field '{field}' converted from '{value}' to {number}.")

    if number < minimum or (maximum is not None and number > maximum):
        bounds = f"[{minimum}, {maximum}]" if maximum is not None else f">= {minimum}"
        msg = f"Field '{field}' value {number} outside {bounds}."
        if strict:
            raise ValueError(msg)
        number = max(minimum, number)
        if maximum is not None:
            number = min(maximum, number)
        warnings.append(f"{msg} Clamped to {number}.")

    return int(number)


def _normalize_level(level: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Upper-case a logging level name and reject unknown names."""
    name = level.upper()
    if name in LEVEL_BY_NAME:
        return name

    msg = f"Unknown log level '{level}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using {fallback}.")
    return fallback
