"""
workforce_config -- single public entrypoint for workforce configuration.

Responsibility:
    ``get_active_config()`` is the only way runtime code obtains
    configuration.  No other component reads YAML files or environment
    variables for fences, payroll model or request policy.

Architecture position:
    Configuration -- sits above ``workforce_kernel`` and
    ``workforce_engines``; services in ``workforce_modules`` receive the
    returned ``WorkforceConfiguration`` through their constructors.

Invariants enforced:
    - Validation runs before a configuration is handed out.
    - Same YAML always yields the same checksum.

Failure modes:
    - ``FileNotFoundError`` -- the requested file does not exist.
    - ``yaml.YAMLError`` / ``KeyError`` -- malformed file.
    - ``ConfigurationError`` -- semantic validation failed.

Audit relevance:
    Every successful call emits a ``WORKFORCE_CONFIG_TRACE`` log record
    with the source path, checksum, payroll model and fence names.
"""

from __future__ import annotations

from pathlib import Path

from workforce_config.loader import load_configuration
from workforce_config.schema import (
    GeofenceDef,
    PayrollPolicyDef,
    RequestPolicyDef,
    WorkforceConfiguration,
)
from workforce_config.validator import validate_configuration
from workforce_kernel.exceptions import ConfigurationError
from workforce_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "workforce.yaml"


def get_active_config(config_path: Path | None = None) -> WorkforceConfiguration:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: YAML file to load.  Defaults to the bundled
            ``defaults/workforce.yaml``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If validation reports errors.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    config = load_configuration(path)

    validation = validate_configuration(config)
    for warning in validation.warnings:
        _logger.warning("config_validation_warning", extra={"detail": warning})
    if not validation.is_valid:
        raise ConfigurationError(validation.errors)

    _logger.info(
        "WORKFORCE_CONFIG_TRACE",
        extra={
            "trace_type": "WORKFORCE_CONFIG_TRACE",
            "source": str(path),
            "checksum": config.checksum,
            "payroll_model": config.payroll.model,
            "geofences": [fence.name for fence in config.geofences],
        },
    )
    return config


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "GeofenceDef",
    "PayrollPolicyDef",
    "RequestPolicyDef",
    "WorkforceConfiguration",
    "get_active_config",
]
