"""Configuration for iconfinder"""

from pathlib import Path

from dynaconf import Dynaconf, Validator

# Validators for iconfinder settings.
_validators = [
    Validator("logging.format", is_in=["mozlog", "pretty"]),
    Validator(
        "logging.level",
        "logging.http_client_level",
        is_in=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    ),
    Validator("logging.can_propagate", is_type_of=bool),
    Validator("metrics.dev_logger", is_type_of=bool),
    Validator("metrics.host", is_type_of=str),
    Validator("metrics.port", gte=0, is_type_of=int),
    Validator("icons.user_agent", is_type_of=str, must_exist=True),
    # Every probe is awaited sequentially, so an upper bound keeps a fully exhausted
    # chain from stalling the caller for minutes.
    Validator("icons.probe_timeout_sec", is_type_of=float, gt=0, lte=30.0),
    Validator("icons.page_timeout_sec", is_type_of=float, gt=0, lte=30.0),
    Validator("icons.min_dimension_px", is_type_of=int, gte=1),
    Validator("icons.manifest_min_icon_px", is_type_of=int, gte=0),
    Validator("icons.well_known_paths", is_type_of=list, must_exist=True),
    Validator("icons.icon_services", is_type_of=list, must_exist=True),
    Validator("icons.thresholds.large_icon_px", "icons.thresholds.medium_icon_px", is_type_of=int),
    Validator(
        "icons.thresholds.large_icon_min_kb",
        "icons.thresholds.medium_icon_min_kb",
        "icons.thresholds.small_icon_min_kb",
        "icons.thresholds.well_known_min_kb",
        "icons.thresholds.service_min_kb",
        "icons.thresholds.favicon_min_kb",
        is_type_of=float,
        gte=0,
        must_exist=True,
    ),
    Validator("bridge.request_timeout_sec", is_type_of=float, gt=0),
    Validator("bridge.endpoint", is_type_of=str),
]

# `root_path` = The directory holding the settings files below.
# `envvar_prefix` = Export envvars with `export ICONFINDER_FOO=bar`.
# `settings_files` = Load these files in the order.
# `environments` = Enable layered environments such as `development`, `production`, `testing` etc.
# `env_switcher` = Switch environments by `export ICONFINDER_ENV=production`.
#   Default: `development`.
# `validators` = Define validators for iconfinder settings.

settings = Dynaconf(
    root_path=str(Path(__file__).parent),
    envvar_prefix="ICONFINDER",
    settings_files=[
        "default.toml",
        "development.toml",
        "production.toml",
        "testing.toml",
    ],
    environments=True,
    env_switcher="ICONFINDER_ENV",
    validators=_validators,
)
