"""
Configuration Validator (``workforce_config.validator``).

Semantic checks the loader cannot express: known payroll model, sane
coordinates, positive radii and day lengths, and the two fences the
attendance service depends on.  Errors block activation; warnings do not.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from workforce_config.schema import WorkforceConfiguration

PAYROLL_MODELS = frozenset({"monthly_aggregate", "prorated_attendance"})

REQUIRED_GEOFENCES = ("check_in", "workplace")


@dataclass
class ConfigValidationResult:
    """Errors and warnings collected from one validation pass."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def validate_configuration(config: WorkforceConfiguration) -> ConfigValidationResult:
    result = ConfigValidationResult()

    _validate_geofences(config, result)
    _validate_payroll_policy(config, result)
    _validate_request_policy(config, result)

    return result


def _validate_geofences(
    config: WorkforceConfiguration, result: ConfigValidationResult
) -> None:
    names = {fence.name for fence in config.geofences}
    for required in REQUIRED_GEOFENCES:
        if required not in names:
            result.add_error(f"geofences.{required} is required")

    for fence in config.geofences:
        if not -90.0 <= fence.latitude <= 90.0:
            result.add_error(
                f"geofences.{fence.name}.latitude {fence.latitude} outside [-90, 90]"
            )
        if not -180.0 <= fence.longitude <= 180.0:
            result.add_error(
                f"geofences.{fence.name}.longitude {fence.longitude} outside [-180, 180]"
            )
        if fence.radius_meters <= 0:
            result.add_error(
                f"geofences.{fence.name}.radius_meters must be positive"
            )


def _validate_payroll_policy(
    config: WorkforceConfiguration, result: ConfigValidationResult
) -> None:
    if config.payroll.model not in PAYROLL_MODELS:
        result.add_error(
            f"payroll.model {config.payroll.model!r} is not one of "
            f"{sorted(PAYROLL_MODELS)}"
        )
    minutes = config.payroll.working_minutes_per_day
    if not 0 < minutes <= 24 * 60:
        result.add_error(
            f"payroll.working_minutes_per_day {minutes} outside (0, 1440]"
        )
    elif config.payroll.model == "monthly_aggregate" and minutes != 480:
        result.add_warning(
            "payroll.working_minutes_per_day only affects the prorated_attendance model"
        )


def _validate_request_policy(
    config: WorkforceConfiguration, result: ConfigValidationResult
) -> None:
    if config.requests.sick_auto_approve_max_days < 0:
        result.add_error("requests.sick_auto_approve_max_days must not be negative")
