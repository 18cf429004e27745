# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "daybook"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_ENTRIES_PATH: Path = DATA_PATH / "entries.yaml"
DATA_SCHEDULER_STATE_PATH: Path = DATA_PATH / "scheduler_state.yaml"
DATA_ALERTS_PATH: Path = DATA_PATH / "alerts.yaml"


class Configuration(TypedDict):
    start_hour: int
    end_hour: int
    window_minutes: int
    horizon_days: int
    one_shot_lead_seconds: int
    timezone: str
    data_path: Optional[str]


def get_default_configuration() -> Configuration:
    return {
        "start_hour": 10,
        "end_hour": 22,
        "window_minutes": 10,
        "horizon_days": 14,
        "one_shot_lead_seconds": 60,
        "timezone": "local",
        "data_path": None,
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    global DATA_PATH, DATA_ENTRIES_PATH, DATA_SCHEDULER_STATE_PATH, DATA_ALERTS_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)

        DATA_ENTRIES_PATH = DATA_PATH / "entries.yaml"
        DATA_SCHEDULER_STATE_PATH = DATA_PATH / "scheduler_state.yaml"
        DATA_ALERTS_PATH = DATA_PATH / "alerts.yaml"
