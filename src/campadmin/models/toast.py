"""Notification payloads returned with mutation responses"""

from typing import Optional

from .base import CamelModel


class ToastAction(CamelModel):
    label: str
    undo_id: str


class Toast(CamelModel):
    title: str
    description: str = ""
    variant: str = "default"
    action: Optional[ToastAction] = None


class ActionResponse(CamelModel):
    """Result of an admin mutation"""
    ok: bool = True
    toast: Optional[Toast] = None
    data: Optional[dict] = None
