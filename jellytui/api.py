# jellytui/api.py

import logging
from typing import Optional, List
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from .errors import NetworkError, ServerError, DecodeError
from .models import (
    CatalogQuery, CatalogRecord, ItemsResponse, RecordKind, ServerItem, SessionProfile, PLAYABLE_KINDS,
)

logger = logging.getLogger(__name__)

STREAM_PATH = "/Videos/{item_id}/stream"

def base_url(profile: SessionProfile) -> str:
    return profile.server_url.rstrip("/")

def stream_url(profile: SessionProfile, item_id: str) -> str:
    """Builds the locator the player opens for an item. No request is made."""
    path = STREAM_PATH.format(item_id=item_id)
    return f"{base_url(profile)}{path}?{urlencode({'api_key': profile.api_key})}"

def _redact(url: httpx.URL) -> str:
    if "api_key" not in url.params:
        return str(url)
    return str(url.copy_set_param("api_key", "***"))

class APIClient:
    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        # no timeout: a hung request only ever stalls the view that asked for it
        self._client = http_client or httpx.AsyncClient(http2=True, timeout=None)

    async def _request(self, profile: SessionProfile, query: CatalogQuery) -> httpx.Response:
        """Makes one authenticated GET against the Jellyfin server."""
        params = dict(query.params)
        params["api_key"] = profile.api_key

        try:
            request = self._client.build_request("GET", f"{base_url(profile)}{query.path}", params=params)
        except httpx.InvalidURL as e:
            raise NetworkError(f"invalid server url {profile.server_url!r}: {e}") from e

        logger.debug("GET %s", _redact(request.url))
        try:
            response = await self._client.send(request)
        except httpx.TransportError as e:
            raise NetworkError(f"could not reach {profile.server_url}: {e}") from e

        if not response.is_success:
            raise ServerError(response.status_code, response.reason_phrase)
        return response

    async def fetch(self, profile: SessionProfile, query: CatalogQuery) -> List[CatalogRecord]:
        """Runs a query and decodes the item list into catalog records, in server order."""
        response = await self._request(profile, query)
        try:
            payload = ItemsResponse.model_validate(response.json())
        except ValueError as e:  # json.JSONDecodeError and pydantic's ValidationError
            raise DecodeError(f"unexpected response for {query.name}: {e}") from e

        records = []
        for item in payload.items:
            record = self._to_record(profile, query, item)
            if record is None:
                logger.debug("skipping %s item %s of type %r", query.name, item.id, item.type)
                continue
            records.append(record)
        logger.info("%s: %d records", query.name, len(records))
        return records

    def _to_record(self, profile: SessionProfile, query: CatalogQuery, item: ServerItem) -> Optional[CatalogRecord]:
        try:
            kind = RecordKind(item.type)
        except ValueError:
            kind = query.kind
        if kind is None or kind not in (RecordKind.MOVIE, RecordKind.SERIES, RecordKind.SEASON, RecordKind.EPISODE):
            return None

        sequence = item.index_number if item.index_number is not None and item.index_number >= 0 else None
        display_title = item.name
        if kind == RecordKind.EPISODE and sequence:
            display_title = f"E{sequence:02d}: {item.name}"

        try:
            return CatalogRecord(
                id=item.id,
                title=item.name,
                kind=kind,
                parent_id=(query.parent_id or item.parent_id) if kind in (RecordKind.SEASON, RecordKind.EPISODE) else None,
                sequence_number=sequence if kind == RecordKind.EPISODE else None,
                display_title=display_title,
                stream_locator=stream_url(profile, item.id) if kind in PLAYABLE_KINDS else "",
            )
        except ValidationError as e:
            raise DecodeError(f"bad item {item.id} in {query.name}: {e}") from e

    # --- shortcuts used by the command line ---
    async def get_movies(self, profile: SessionProfile) -> List[CatalogRecord]:
        return await self.fetch(profile, CatalogQuery.movies())

    async def get_series(self, profile: SessionProfile) -> List[CatalogRecord]:
        return await self.fetch(profile, CatalogQuery.series())

    async def get_seasons(self, profile: SessionProfile, series_id: str) -> List[CatalogRecord]:
        return await self.fetch(profile, CatalogQuery.seasons(series_id))

    async def get_episodes(self, profile: SessionProfile, season_id: str) -> List[CatalogRecord]:
        return await self.fetch(profile, CatalogQuery.episodes(season_id))

    async def search(self, profile: SessionProfile, text: str) -> List[CatalogRecord]:
        return await self.fetch(profile, CatalogQuery.search(text))

    async def close(self):
        await self._client.aclose()
