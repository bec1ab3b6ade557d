# SPDX-License-Identifier: MIT

import atexit
import logging

from gotrack import configuration
from gotrack.repository.configuration import CONFIGURATION_REPO
from gotrack.repository.entry import ENTRY_REPO
from gotrack.repository.id_map import ID_MAP_REPO

logger = logging.getLogger(__name__)


def flush_and_sync() -> None:
    """Write pending configuration, id map and local entry changes to disk."""
    CONFIGURATION_REPO.flush()
    ID_MAP_REPO.flush()

    # The Supabase backend writes through, only the local store buffers
    if ENTRY_REPO.flush():
        logger.debug("Flushed local entries to %s", configuration.DATA_ENTRIES_DIR)


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
