"""
Pydantic models for request bodies.
"""
from typing import List, Optional
from pydantic import BaseModel


class ModifyMessageRequest(BaseModel):
    """Label changes for one message"""
    messageId: Optional[str] = None
    addLabelIds: Optional[List[str]] = None
    removeLabelIds: Optional[List[str]] = None
