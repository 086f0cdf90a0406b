from dataclasses import dataclass

from common.query import Page


@dataclass
class NotificationPageDto(Page):
    unread_count: int = 0
