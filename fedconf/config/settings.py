"""
Validator settings.

Resolves the tunable inputs of the KubeFedConfig validator:
- jitter_factor: multiplier applied to the leader-election retry period
- known_features: closed set of accepted feature gate names

Precedence (highest to lowest):
1. Explicit overrides passed to ``load_settings``
2. Environment variables (FEDCONF_*)
3. Defaults

Environment variables:
    FEDCONF_JITTER_FACTOR=1.5
    FEDCONF_KNOWN_FEATURES=PushReconciler,SchedulerPreferences
"""

import logging
import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fedconf.core.features import KNOWN_FEATURES
from fedconf.core.leaderelection import DEFAULT_JITTER_FACTOR
from fedconf.errors import SettingsError

logger = logging.getLogger(__name__)

ENV_PREFIX = "FEDCONF"
JITTER_FACTOR_ENV = f"{ENV_PREFIX}_JITTER_FACTOR"
KNOWN_FEATURES_ENV = f"{ENV_PREFIX}_KNOWN_FEATURES"


class ValidatorSettings(BaseModel):
    """Settings consumed by the validators.

    Attributes:
        jitter_factor: Retry-period multiplier for the renewDeadline check
        known_features: Feature gate names accepted in KubeFedConfig
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    jitter_factor: float = Field(DEFAULT_JITTER_FACTOR, gt=0.0, description="Jitter factor")
    known_features: frozenset[str] = Field(KNOWN_FEATURES, description="Known feature gates")

    @field_validator("known_features", mode="before")
    @classmethod
    def _split_features(cls, value: Any) -> Any:
        if isinstance(value, str):
            return frozenset(name.strip() for name in value.split(",") if name.strip())
        return value

    @field_validator("known_features")
    @classmethod
    def _require_features(cls, value: frozenset[str]) -> frozenset[str]:
        if not value:
            msg = "known_features must name at least one feature"
            raise ValueError(msg)
        return value


def load_settings(
    environ: Mapping[str, str] | None = None, **overrides: Any
) -> ValidatorSettings:
    """Build ValidatorSettings from defaults, environment and overrides.

    Args:
        environ: Environment mapping (defaults to os.environ)
        **overrides: Explicit values; ``None`` values are ignored

    Returns:
        ValidatorSettings

    Raises:
        SettingsError: If a value cannot be interpreted

    Example:
        settings = load_settings(jitter_factor=1.5)
        errs = validate_kubefed_config(cfg, jitter_factor=settings.jitter_factor)
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    if env.get(JITTER_FACTOR_ENV):
        values["jitter_factor"] = env[JITTER_FACTOR_ENV]
        logger.debug("Using %s=%s", JITTER_FACTOR_ENV, env[JITTER_FACTOR_ENV])
    if env.get(KNOWN_FEATURES_ENV):
        values["known_features"] = env[KNOWN_FEATURES_ENV]
        logger.debug("Using %s=%s", KNOWN_FEATURES_ENV, env[KNOWN_FEATURES_ENV])

    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ValidatorSettings.model_validate(values)
    except ValidationError as e:
        error_messages = []
        for error in e.errors():
            location = " -> ".join(str(loc) for loc in error["loc"])
            error_messages.append(f"  {location}: {error['msg']}")
        msg = "Invalid validator settings:\n" + "\n".join(error_messages)
        raise SettingsError(msg) from e
