# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daygrid import configuration
from daygrid.color import normalize_event_color


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if configuration.APP_CONFIG_PATH.is_file():
            self._config = load(
                configuration.APP_CONFIG_PATH.read_text(), Loader=Loader
            )
        if self._config is None:
            self._config = configuration.get_default_configuration()
            self.is_dirty = True
            return

        # Fill in any keys added since the file was written
        for key, value in configuration.get_default_configuration().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]
                self.is_dirty = True

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        slot_height: Optional[int] = None,
        minutes_per_slot: Optional[int] = None,
        default_calendar: Optional[str] = None,
        next_event_color: Optional[int] = None,
        show_header: Optional[bool] = None,
        data_path: Optional[str] = None,
        log_level: Optional[str] = None,
        remove_default_calendar: bool = False,
        remove_data_path: bool = False,
    ) -> None:
        self.is_dirty = True

        if slot_height is not None:
            if slot_height <= 0:
                raise ValueError("slot_height must be positive")
            self.config["slot_height"] = slot_height
        if minutes_per_slot is not None:
            if minutes_per_slot <= 0:
                raise ValueError("minutes_per_slot must be positive")
            self.config["minutes_per_slot"] = minutes_per_slot
        if default_calendar is not None:
            self.config["default_calendar"] = default_calendar
        if next_event_color is not None:
            self.config["next_event_color"] = normalize_event_color(next_event_color)
        if show_header is not None:
            self.config["show_header"] = show_header
        if data_path is not None:
            self.config["data_path"] = data_path
        if log_level is not None:
            self.config["log_level"] = log_level.upper()

        if remove_default_calendar:
            self.config["default_calendar"] = None
        if remove_data_path:
            self.config["data_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
