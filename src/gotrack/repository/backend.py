# SPDX-License-Identifier: MIT

import logging
from typing import Optional, TypeAlias, Union

from gotrack.configuration import Configuration
from gotrack.errors import ConfigurationError
from gotrack.repository.entry import ENTRY_REPO, EntryRepository
from gotrack.repository.supabase import SupabaseEntryRepository

logger = logging.getLogger(__name__)

AnyEntryRepository: TypeAlias = Union[EntryRepository, SupabaseEntryRepository]

_supabase_repo: Optional[SupabaseEntryRepository] = None


def get_entry_repository(config: Configuration) -> AnyEntryRepository:
    """Choose the entry datastore from configuration."""
    global _supabase_repo

    backend = config["backend"]
    if backend == "local":
        return ENTRY_REPO
    if backend == "supabase":
        if _supabase_repo is None:
            logger.info("Using Supabase repository (table=%s)", config["supabase_table"])
            _supabase_repo = SupabaseEntryRepository(
                config["supabase_url"],
                config["supabase_key"],
                config["supabase_table"],
            )
        return _supabase_repo
    raise ConfigurationError(f"Unknown backend: {backend}. Valid options: local, supabase")
