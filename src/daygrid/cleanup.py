# SPDX-License-Identifier: MIT

import atexit
import logging

from daygrid.repository.calendar import CALENDAR_REPO, CommitError
from daygrid.repository.configuration import CONFIGURATION_REPO

logger = logging.getLogger(__name__)


def flush() -> None:
    CONFIGURATION_REPO.flush()
    try:
        CALENDAR_REPO.flush()
    except CommitError as e:
        logger.error("calendar changes were not saved: %s", e)


def register_cleanup() -> None:
    atexit.register(flush)
