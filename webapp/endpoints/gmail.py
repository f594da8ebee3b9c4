"""
Gmail endpoints: profile, inbox listing and label changes.
"""
import logging

from fastapi import APIRouter, HTTPException, Request

from gmail_oauth import InboxBriefError
from ..dependencies import get_gmail_client, to_http_exception
from ..models import ModifyMessageRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/gmail")


@router.get("/profile")
async def gmail_profile(request: Request):
    """Mailbox profile of the signed-in user"""
    gmail = get_gmail_client(request)
    try:
        return await gmail.get_profile()
    except InboxBriefError as e:
        raise to_http_exception(e)


@router.get("/messages")
async def gmail_messages(request: Request):
    """Newest inbox messages, decoded to plain text

    Messages that fail to load are returned as {"id", "error"} items.
    """
    gmail = get_gmail_client(request)
    try:
        page = await gmail.list_inbox()
    except InboxBriefError as e:
        raise to_http_exception(e)
    return page.to_dict()


@router.post("/modify")
async def gmail_modify(body: ModifyMessageRequest, request: Request):
    """Add/remove labels on one message"""
    gmail = get_gmail_client(request)
    if not body.messageId:
        raise HTTPException(status_code=400, detail={"error": "messageId is required"})
    try:
        return await gmail.modify_message(
            body.messageId,
            add_label_ids=body.addLabelIds,
            remove_label_ids=body.removeLabelIds,
        )
    except InboxBriefError as e:
        raise to_http_exception(e)
