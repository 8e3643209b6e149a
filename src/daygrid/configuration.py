# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "daygrid"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_CALENDARS_PATH: Path = DATA_PATH / "calendars.yaml"


class Configuration(TypedDict):
    slot_height: int
    minutes_per_slot: int
    default_calendar: Optional[str]
    next_event_color: int
    show_header: bool
    data_path: Optional[str]
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "slot_height": 30,
        "minutes_per_slot": 60,
        "default_calendar": None,
        "next_event_color": 0,
        "show_header": True,
        "data_path": None,
        "log_level": "WARNING",
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_CALENDARS_PATH

    DATA_PATH = data_path
    DATA_CALENDARS_PATH = DATA_PATH / "calendars.yaml"
