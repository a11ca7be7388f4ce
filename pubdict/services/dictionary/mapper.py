"""Map PubDictionaries JSON responses onto dictionary records."""

import logging
import re
from typing import Any

from pubdict.config import Settings
from pubdict.services.dictionary.base import DictInfo, Entry, Match, MatchType, Record
from pubdict.services.dictionary.urls import BackendTarget, EndpointKind

logger = logging.getLogger(__name__)

_DICT_NAME_RE = re.compile(r"dictionaries/(.*?)/")


def refine_id(entry_id: str) -> str:
    """Strip scheme and www. from an identifier to use it as a description."""
    return entry_id.strip().replace("http://", "").replace("https://", "").replace("www.", "")


def target_dict_name(target: BackendTarget) -> str:
    """Return the dictionary a target addresses, or '' when it cannot be told."""
    if target.dict_name:
        return target.dict_name
    match = _DICT_NAME_RE.search(target.url)
    if match:
        return match.group(1)
    logger.warning(f"No dictionary name in backend URL {target.url}")
    return ""


def map_dict_info(body: dict[str, Any], settings: Settings) -> list[DictInfo]:
    """A dictionary info response describes a single dictionary."""
    name = body["name"]
    dict_id = settings.dict_infos_url.replace("$filterDictID", name).replace(".json", "")
    return [DictInfo(id=dict_id, name=name)]


def map_dict_entries(
    body: list[dict[str, Any]], target: BackendTarget, settings: Settings
) -> list[Entry]:
    dict_name = target_dict_name(target)
    dict_id = settings.dict_id_prefix + dict_name
    return [
        Entry(
            id=item["id"],
            dict_id=dict_id,
            description=refine_id(item["id"]),
            terms=(item["label"],),
            z={"dictAbbrev": dict_name},
        )
        for item in body
    ]


def map_find_terms(body: dict[str, list[dict[str, Any]]], settings: Settings) -> list[Entry]:
    """
    Map a find_terms response of identifier -> [{label, dictionary}, ...].

    One entry is produced per (identifier, dictionary) pair, holding every
    label of that identifier in that dictionary, in response order.
    """
    entries: list[Entry] = []
    for entry_id, tuples in body.items():
        labels_by_dict: dict[str, list[str]] = {}
        for item in tuples:
            labels_by_dict.setdefault(item["dictionary"], []).append(item["label"])

        for dict_name, labels in labels_by_dict.items():
            entries.append(
                Entry(
                    id=entry_id,
                    dict_id=settings.dict_id_prefix + dict_name,
                    description=refine_id(entry_id),
                    terms=tuple(labels),
                    z={"dictAbbrev": dict_name},
                )
            )
    return entries


def map_completion(
    body: list[dict[str, Any]], target: BackendTarget, search: str, settings: Settings
) -> list[Match]:
    """Map completion results; labels starting with the search string are prefix matches."""
    dict_name = target_dict_name(target)
    dict_id = settings.dict_id_prefix + dict_name
    return [
        Match(
            id=item["id"],
            dict_id=dict_id,
            matched_string=item["label"],
            description=refine_id(item["id"]),
            match_type=MatchType.PREFIX
            if item["label"].startswith(search)
            else MatchType.SUBSTRING,
            terms=(item["label"],),
            z={"dictAbbrev": dict_name},
        )
        for item in body
    ]


def map_response(
    target: BackendTarget, body: Any, settings: Settings, search: str = ""
) -> list[Record]:
    """Map one backend response according to the kind of endpoint that produced it."""
    if target.kind is EndpointKind.DICT_INFO:
        return list(map_dict_info(body, settings))
    if target.kind is EndpointKind.DICT_ENTRIES:
        return list(map_dict_entries(body, target, settings))
    if target.kind is EndpointKind.FIND_TERMS:
        return list(map_find_terms(body, settings))
    return list(map_completion(body, target, search, settings))
