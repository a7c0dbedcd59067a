"""Configuration and learned-list readers.

The config file holds one ``key: value`` pair per line::

    standardLibraryPath: /usr/local/go/src
    vendorRelPath: vendor

The learned list holds one import path per line.
"""

from __future__ import annotations

import logging
from pathlib import Path

from layer_audit.errors import ConfigError
from layer_audit.models import AuditConfig

logger = logging.getLogger(__name__)

_ROOT_KEYS = ("standardLibraryPath", "root_path")
_VENDOR_KEYS = ("vendorRelPath", "vendor_segment")


def parse_config(text: str) -> dict[str, str]:
    """Parse ``key: value`` lines into a dict keyed by canonical field name."""
    values: dict[str, str] = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        parts = stripped.split(":", 1)
        if len(parts) != 2:
            raise ConfigError(f"Error parsing line {line_number}: {line!r}")
        key, value = parts[0].strip(), parts[1].strip()
        if key in _ROOT_KEYS:
            values["root_path"] = value
        elif key in _VENDOR_KEYS:
            values["vendor_segment"] = value
        else:
            raise ConfigError(f"Invalid config key on line {line_number}: {key}")
    return values


def load_config(
    config_file: Path | None = None,
    root_path: Path | None = None,
    vendor_segment: str | None = None,
    learned_file: Path | None = None,
) -> AuditConfig:
    """Build an AuditConfig from the config file and explicit overrides.

    Explicit arguments win over file values. A root path is required and
    must be an existing directory.
    """
    values: dict[str, str] = {}
    if config_file is not None:
        try:
            values = parse_config(Path(config_file).read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Cannot read config file {config_file}: {e.strerror}") from e

    root = root_path or (Path(values["root_path"]) if "root_path" in values else None)
    if root is None:
        raise ConfigError("No root path configured (standardLibraryPath)")
    if not Path(root).is_dir():
        raise ConfigError(f"Root path is not a directory: {root}")

    config = AuditConfig(root_path=Path(root), learned_file=learned_file)
    vendor = vendor_segment or values.get("vendor_segment")
    if vendor:
        config.vendor_segment = vendor
    logger.debug("config: root=%s vendor=%s", config.root, config.vendor_segment)
    return config


def read_learned_paths(learned_file: Path | None) -> list[str]:
    """Import paths already learned. A missing file means none are."""
    if learned_file is None:
        return []
    path = Path(learned_file)
    if not path.exists():
        logger.info("No learned packages file at %s", path)
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Cannot read learned packages from %s: %s", learned_file, e.strerror)
        return []

    paths = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            paths.append(stripped)
    return paths
