"""HTTP routes exposing the dictionary query contract."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from pubdict.services.dictionary import DictionaryBackend, items

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dictionary"])


def get_backend(request: Request) -> DictionaryBackend:
    return request.app.state.backend


def build_options(
    ids: list[str] | None = None,
    dict_ids: list[str] | None = None,
    sort: str | None = None,
    sort_dict_ids: list[str] | None = None,
    page: int | None = None,
    per_page: int | None = None,
    z: list[str] | None = None,
    get_all_results: bool = False,
) -> dict[str, Any]:
    """Translate query parameters into a contract options object."""
    options: dict[str, Any] = {}
    filt = {key: value for key, value in (("id", ids), ("dictID", dict_ids)) if value}
    if filt:
        options["filter"] = filt
    if sort_dict_ids:
        options["sort"] = {"dictID": sort_dict_ids}
    elif sort:
        options["sort"] = sort
    if page is not None:
        options["page"] = page
    if per_page is not None:
        options["perPage"] = per_page
    if z is not None:
        options["z"] = z
    if get_all_results:
        options["getAllResults"] = True
    return options


@router.get("/dictionaries")
async def list_dict_infos(
    ids: list[str] | None = Query(None, alias="id"),
    page: int | None = Query(None),
    per_page: int | None = Query(None, alias="perPage"),
    backend: DictionaryBackend = Depends(get_backend),
) -> dict[str, Any]:
    """Information about the dictionaries named by `id`."""
    options = build_options(ids=ids, page=page, per_page=per_page)
    return items(await backend.get_dict_infos(options))


@router.get("/entries")
async def list_entries(
    ids: list[str] | None = Query(None, alias="id"),
    dict_ids: list[str] | None = Query(None, alias="dictID"),
    sort: str | None = Query(None),
    page: int | None = Query(None),
    per_page: int | None = Query(None, alias="perPage"),
    z: list[str] | None = Query(None),
    get_all_results: bool = Query(False, alias="getAllResults"),
    backend: DictionaryBackend = Depends(get_backend),
) -> dict[str, Any]:
    options = build_options(
        ids=ids,
        dict_ids=dict_ids,
        sort=sort,
        page=page,
        per_page=per_page,
        z=z,
        get_all_results=get_all_results,
    )
    return items(await backend.get_entries(options))


@router.get("/matches")
async def list_matches(
    q: str = Query(""),
    dict_ids: list[str] | None = Query(None, alias="dictID"),
    sort_dict_ids: list[str] | None = Query(None, alias="sortDictID"),
    page: int | None = Query(None),
    per_page: int | None = Query(None, alias="perPage"),
    z: list[str] | None = Query(None),
    backend: DictionaryBackend = Depends(get_backend),
) -> dict[str, Any]:
    """String-match suggestions for `q`."""
    options = build_options(
        dict_ids=dict_ids, sort_dict_ids=sort_dict_ids, page=page, per_page=per_page, z=z
    )
    return items(await backend.get_entry_matches_for_string(q, options))
