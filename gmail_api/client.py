"""Gmail REST client

Every request asks the OAuth manager for a fresh access token first, so a
stale token is refreshed before it reaches Gmail.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx

import settings
from gmail_oauth import GoogleOAuthManager
from gmail_oauth.errors import MalformedResponse, PerItemFetchError, ProviderError
from .message import decode_gmail_message
from .models import DecodedMessage, FetchResult, MessagePage, MessageRef

logger = logging.getLogger(__name__)


class GmailClient:
    """Gmail API calls on behalf of one session"""

    def __init__(
        self,
        oauth_manager: GoogleOAuthManager,
        session_id: str,
        http_client: Optional[httpx.AsyncClient] = None,
        api_base: Optional[str] = None,
    ):
        """Initialize Gmail client

        Args:
            oauth_manager: Token lifecycle manager
            session_id: Session whose tokens are used
            http_client: Shared HTTP client (default: one per call)
            api_base: Gmail users/me base URL (default: from settings)
        """
        self.oauth_manager = oauth_manager
        self.session_id = session_id
        self.http_client = http_client
        self.api_base = (api_base or settings.GMAIL_API_BASE).rstrip("/")

    def _get_headers(self, access_token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }

    async def _send(self, method: str, url: str, access_token: str, **kwargs) -> httpx.Response:
        headers = self._get_headers(access_token)
        if self.http_client is not None:
            return await self.http_client.request(method, url, headers=headers, **kwargs)
        timeout = httpx.Timeout(settings.REQUEST_TIMEOUT, connect=settings.CONNECT_TIMEOUT)
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.request(method, url, headers=headers, **kwargs)

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        access_token: Optional[str] = None,
        **kwargs,
    ) -> httpx.Response:
        """Send an authenticated request and fail on non-2xx

        Raises:
            ProviderError: non-2xx status or transport failure
        """
        if access_token is None:
            access_token = await self.oauth_manager.ensure_access_token(self.session_id)

        url = f"{self.api_base}/{path}"
        try:
            response = await self._send(method, url, access_token, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"{operation} request failed: {e}")
            raise ProviderError(None, str(e), operation) from e

        if not response.is_success:
            logger.error(f"{operation} failed with status {response.status_code}: {response.text}")
            raise ProviderError(response.status_code, response.text, operation)
        return response

    @staticmethod
    def _json(response: httpx.Response, operation: str) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse {operation} response: {e}")
            raise MalformedResponse(operation, str(e)) from e
        if not isinstance(data, dict):
            raise MalformedResponse(operation, f"expected a JSON object, got {type(data).__name__}")
        return data

    async def get_profile(self) -> Dict[str, Any]:
        """Get the mailbox profile (email address, message totals)"""
        response = await self._request("GET", "profile", "Gmail profile")
        return self._json(response, "Gmail profile")

    async def list_messages(
        self,
        max_results: Optional[int] = None,
        label_ids: Sequence[str] = (),
    ) -> Tuple[List[MessageRef], Optional[str]]:
        """List message ids, newest first (one page only)

        Args:
            max_results: Page size (default: GMAIL_LIST_MAX_RESULTS)
            label_ids: Labels to filter on (default: GMAIL_LIST_LABEL)

        Returns:
            Tuple of (message refs, next page token or None)
        """
        params = [("maxResults", str(max_results or settings.GMAIL_LIST_MAX_RESULTS))]
        for label in (label_ids or (settings.GMAIL_LIST_LABEL,)):
            params.append(("labelIds", label))

        response = await self._request("GET", "messages", "Gmail list", params=params)
        data = self._json(response, "Gmail list")

        refs = [
            MessageRef(id=str(m["id"]), thread_id=str(m.get("threadId") or ""))
            for m in data.get("messages") or []
            if isinstance(m, dict) and m.get("id")
        ]
        return refs, data.get("nextPageToken")

    async def _fetch_message(self, message_id: str, access_token: Optional[str] = None) -> DecodedMessage:
        response = await self._request(
            "GET",
            f"messages/{quote(message_id, safe='')}",
            "Gmail get",
            access_token=access_token,
            params={"format": "full"},
        )
        resource = self._json(response, "Gmail get")
        try:
            return decode_gmail_message(resource)
        except (ValueError, LookupError, TypeError) as e:
            logger.error(f"Failed to decode message {message_id}: {e}")
            raise MalformedResponse("Gmail get", f"undecodable message {message_id}: {e}") from e

    async def get_message(self, message_id: str) -> DecodedMessage:
        """Fetch and decode one message"""
        return await self._fetch_message(message_id)

    async def fetch_messages(self, message_ids: Sequence[str]) -> List[FetchResult]:
        """Fetch and decode several messages concurrently

        A provider, parse or decode failure on one message is returned as
        a PerItemFetchError in that message's slot; the others still load.
        Authentication failures are raised for the whole batch.

        Args:
            message_ids: Gmail message ids

        Returns:
            Results in the same order as message_ids
        """
        if not message_ids:
            return []

        access_token = await self.oauth_manager.ensure_access_token(self.session_id)

        async def fetch_one(message_id: str) -> FetchResult:
            try:
                return await self._fetch_message(message_id, access_token)
            except (ProviderError, MalformedResponse) as e:
                logger.warning(f"Fetching message {message_id} failed: {e}")
                return PerItemFetchError(message_id, e)

        results = await asyncio.gather(*(fetch_one(mid) for mid in message_ids))
        failed = sum(1 for r in results if isinstance(r, PerItemFetchError))
        logger.info(f"Fetched {len(results) - failed}/{len(results)} messages")
        return list(results)

    async def list_inbox(self, max_results: Optional[int] = None) -> MessagePage:
        """List the newest inbox messages and decode each of them"""
        refs, next_page_token = await self.list_messages(max_results=max_results)
        items = await self.fetch_messages([ref.id for ref in refs])
        return MessagePage(items=items, next_page_token=next_page_token)

    async def modify_message(
        self,
        message_id: str,
        add_label_ids: Optional[Sequence[str]] = None,
        remove_label_ids: Optional[Sequence[str]] = None,
    ) -> Dict[str, Any]:
        """Add or remove labels on a message

        Returns:
            Gmail's JSON answer, or {"ok": True} if the body is not JSON
        """
        body: Dict[str, List[str]] = {}
        if add_label_ids:
            body["addLabelIds"] = list(add_label_ids)
        if remove_label_ids:
            body["removeLabelIds"] = list(remove_label_ids)

        response = await self._request(
            "POST",
            f"messages/{quote(message_id, safe='')}/modify",
            "Gmail modify",
            json=body,
        )
        try:
            return response.json()
        except ValueError:
            return {"ok": True}
