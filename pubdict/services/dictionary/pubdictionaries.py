"""Dictionary backend answering VSM dictionary queries from PubDictionaries."""

import logging
from collections.abc import Mapping
from typing import Any

from pubdict.config import Settings, settings as default_settings
from pubdict.services.dictionary import aggregate, mapper, urls
from pubdict.services.dictionary.base import (
    DictInfo,
    DictionaryBackend,
    Entry,
    Match,
    QueryOptions,
    z_prune,
)
from pubdict.services.dictionary.errors import NotSupportedError
from pubdict.services.dictionary.fanout import FanOut, Fetch
from pubdict.services.dictionary.transport import HttpTransport

logger = logging.getLogger(__name__)

MATCH_NOT_SUPPORTED = (
    "Not supported: either only sort.dictID's present and page > 1 "
    "or no dictIDs to filter at all"
)


class PubDictionaries(DictionaryBackend):
    """
    Answer dictionary queries by fanning out calls to the PubDictionaries API.

    The API only answers per-dictionary questions (plus identifier lookups),
    so cross-dictionary queries are split into one call per dictionary and
    the partial results are merged, ordered and paged here.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: HttpTransport | None = None,
        fetch: Fetch | None = None,
    ) -> None:
        """
        Initialize the backend.

        Args:
            settings: Frozen settings shared by every component. Defaults to the app settings
            transport: HTTP transport. Defaults to HttpTransport(settings)
            fetch: Override for the request function (url -> decoded JSON body)
        """
        self.settings = settings or default_settings
        self.transport = transport or HttpTransport(self.settings)
        self.fetch: Fetch = fetch or self.transport.perform_request

    @property
    def name(self) -> str:
        return "pubdictionaries"

    def _restrict_dict_ids(self, options: QueryOptions) -> QueryOptions | None:
        """Keep only this backend's dictionaries; None if a filter named none of them."""
        if not options.filter_dict_id:
            return options
        own = urls.in_namespace(options.filter_dict_id, self.settings)
        if not own:
            return None
        return options.with_filter_dict_id(own)

    async def get_dict_infos(self, options: Mapping[str, Any] | None = None) -> list[DictInfo]:
        opts = QueryOptions.from_dict(options)

        if opts.filter_id and not urls.in_namespace(opts.filter_id, self.settings):
            return []

        page = opts.page_or(self.settings)
        page_size = opts.page_size_or(self.settings)

        targets = urls.build_dict_info_targets(opts, self.settings)
        if not targets:
            raise NotSupportedError()

        # each target yields at most one record
        if len(targets) > 1 and page > 1 and len(targets) <= (page - 1) * page_size:
            return []

        logger.debug(f"Fetching info for {len(targets)} dictionaries")
        runner: FanOut[DictInfo] = FanOut(
            self.fetch,
            lambda target, body: mapper.map_dict_info(body, self.settings),
            unknown_dictionary_is_empty=True,
        )
        partials = await runner.run(targets)
        return aggregate.trim_page(aggregate.concat(partials), page, page_size)

    async def get_entries(self, options: Mapping[str, Any] | None = None) -> list[Entry]:
        opts = QueryOptions.from_dict(options)
        if not opts.filter_id and not opts.filter_dict_id:
            raise NotSupportedError()

        restricted = self._restrict_dict_ids(opts)
        if restricted is None:
            return []
        opts = restricted
        opts.get_all_results = opts.get_all_results and bool(opts.filter_id)

        targets = urls.build_entry_targets(opts, self.settings)
        logger.debug(f"Fetching entries with {len(targets)} backend calls")
        runner: FanOut[Entry] = FanOut(
            self.fetch,
            self._map_entries,
            unknown_dictionary_is_empty=bool(opts.filter_id) or len(targets) > 1,
        )
        merged = aggregate.concat(await runner.run(targets))

        if opts.filter_id:
            merged = aggregate.rearrange_entries(merged)
        elif opts.sort:
            merged = aggregate.sort_entries(merged, opts.sort)

        return aggregate.trim_entries(z_prune(merged, opts.z), opts, self.settings)

    def _map_entries(self, target: urls.BackendTarget, body: Any) -> list[Entry]:
        return mapper.map_response(target, body, self.settings)  # type: ignore[return-value]

    async def get_entry_matches_for_string(
        self, search: str, options: Mapping[str, Any] | None = None
    ) -> list[Match]:
        if not search or not search.strip():
            return []

        restricted = self._restrict_dict_ids(QueryOptions.from_dict(options))
        if restricted is None:
            return []
        opts = restricted

        plan = urls.build_match_plan(search, opts, self.settings)
        if not plan.supported:
            raise NotSupportedError(MATCH_NOT_SUPPORTED)

        logger.debug(
            f"Matching '{search}' in {plan.preferred_count} preferred "
            f"and {plan.rest_count} other dictionaries"
        )
        page_size = opts.page_size_or(self.settings)

        def map_matches(target: urls.BackendTarget, body: Any) -> list[Match]:
            matches = mapper.map_completion(body, target, search, self.settings)
            return aggregate.cap(aggregate.remove_duplicate_matches(matches), page_size)

        runner: FanOut[Match] = FanOut(
            self.fetch, map_matches, unknown_dictionary_is_empty=len(plan.targets) > 1
        )
        preferred, rest = aggregate.split_groups(plan.targets, await runner.run(plan.targets))

        merged = aggregate.sort_matches(z_prune(preferred, opts.z)) + aggregate.sort_matches(
            z_prune(rest, opts.z)
        )
        return aggregate.cap(merged, page_size)

    async def close(self) -> None:
        """Close the transport's connections."""
        await self.transport.close()
