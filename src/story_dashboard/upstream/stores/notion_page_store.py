"""Notion implementation of the page store interface."""

import asyncio
import logging
from typing import Any

import httpx
from notion_client import AsyncClient
from notion_client.errors import (
    APIErrorCode,
    APIResponseError,
    HTTPResponseError,
    RequestTimeoutError,
)

from ..config.notion_config import NotionConfig
from ..exceptions.upstream_exceptions import (
    UpstreamError,
    UpstreamFailureError,
    UpstreamTimeoutError,
)
from ..interfaces.page_store_interface import Page, PageStore

logger = logging.getLogger(__name__)

# Notion answers these for ids that do not name a page the integration can see
MISSING_PAGE_CODES = {APIErrorCode.ObjectNotFound, APIErrorCode.ValidationError}


class NotionPageStore(PageStore):
    """
    Page store backed by the Notion API.

    Notion has no batch retrieval endpoint, so batches fan out into single
    page requests bounded by a semaphore to stay inside the API rate limit.
    """

    def __init__(self, config: NotionConfig, client: AsyncClient | None = None):
        """
        Initialize the Notion page store.

        Args:
            config: Notion configuration
            client: Optional pre-configured Notion client
        """
        self.config = config
        self._client = client
        self._semaphore = asyncio.Semaphore(config.max_concurrency)

    @property
    def client(self) -> AsyncClient:
        """Get or create the Notion client."""
        if self._client is None:
            self.config.validate()
            self._client = AsyncClient(
                auth=self.config.api_key, timeout_ms=self.config.timeout * 1000
            )
            logger.info("Created Notion client")
        return self._client

    async def close(self):
        """Close the underlying HTTP client."""
        if self._client is not None:
            try:
                await self._client.aclose()
                logger.info("Notion client closed")
            except Exception as e:
                logger.warning(f"Error closing Notion client: {str(e)}")
            finally:
                self._client = None

    async def get_page(self, page_id: str) -> Page | None:
        try:
            async with self._semaphore:
                return await self.client.pages.retrieve(page_id=page_id)
        except APIResponseError as e:
            if e.code in MISSING_PAGE_CODES:
                logger.debug(f"Page {page_id} not found upstream ({e.code})")
                return None
            raise UpstreamFailureError(
                f"Failed to retrieve page {page_id}: {str(e)}", e
            ) from e
        except RequestTimeoutError as e:
            raise UpstreamTimeoutError(
                f"Timed out retrieving page {page_id}", e
            ) from e
        except (HTTPResponseError, httpx.HTTPError) as e:
            raise UpstreamFailureError(
                f"Failed to retrieve page {page_id}: {str(e)}", e
            ) from e

    async def get_pages_by_ids(self, page_ids: list[str]) -> list[Page]:
        unique_ids = list(dict.fromkeys(pid for pid in page_ids if pid))
        if not unique_ids:
            return []

        results = await asyncio.gather(
            *(self.get_page(pid) for pid in unique_ids), return_exceptions=True
        )

        pages: list[Page] = []
        failures: list[UpstreamError] = []
        for page_id, result in zip(unique_ids, results, strict=True):
            if isinstance(result, UpstreamError):
                logger.warning(f"Dropping page {page_id} from batch: {result}")
                failures.append(result)
            elif isinstance(result, BaseException):
                raise result
            elif result is not None:
                pages.append(result)

        if failures and len(failures) == len(unique_ids):
            raise UpstreamFailureError(
                f"All {len(unique_ids)} pages in batch failed to load",
                failures[0],
            )
        return pages

    async def query_database(
        self, database_id: str, filter: dict[str, Any] | None = None
    ) -> list[Page]:
        body: dict[str, Any] = {}
        if filter:
            body["filter"] = filter

        all_results: list[Page] = []
        has_more = True
        while has_more:
            try:
                async with self._semaphore:
                    response = await self.client.request(
                        path=f"databases/{database_id}/query",
                        method="POST",
                        body=body,
                    )
            except RequestTimeoutError as e:
                raise UpstreamTimeoutError(
                    f"Timed out querying database {database_id}", e
                ) from e
            except (HTTPResponseError, httpx.HTTPError) as e:
                raise UpstreamFailureError(
                    f"Failed to query database {database_id}: {str(e)}", e
                ) from e

            all_results.extend(response.get("results", []))
            has_more = response.get("has_more", False)
            body["start_cursor"] = response.get("next_cursor")
            if has_more and not body["start_cursor"]:
                break

        logger.debug(f"Queried {len(all_results)} pages from database {database_id}")
        return all_results
