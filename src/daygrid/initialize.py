# SPDX-License-Identifier: MIT

import logging

from rich.logging import RichHandler
from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from daygrid import configuration
from daygrid.repository.calendar import CALENDAR_REPO
from daygrid.repository.configuration import CONFIGURATION_REPO
from daygrid.view import state as view_state

logger = logging.getLogger(__name__)


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])
    view_state.set_show_header(config["show_header"])

    __ensure_default_calendar()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))


def __ensure_default_calendar() -> None:
    config = CONFIGURATION_REPO.get_config()
    calendars = CALENDAR_REPO.get_calendars()

    default_calendar = config["default_calendar"]
    if any(calendar["id"] == default_calendar for calendar in calendars):
        return

    if calendars:
        calendar_id = calendars[0]["id"]
    else:
        calendar_id = CALENDAR_REPO.save_new_calendar()
        logger.info("created default calendar %s", calendar_id)
    CONFIGURATION_REPO.update_config(default_calendar=calendar_id)
