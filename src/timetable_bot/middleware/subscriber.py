"""Middleware that registers every chat with the subscription store on first contact."""

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message

from timetable_bot.core.subscriptions import SubscriptionStore


class SubscriberMiddleware(BaseMiddleware):
    def __init__(self, store: SubscriptionStore):
        self.store = store

    async def __call__(
        self,
        handler: Callable[[Message, Dict[str, Any]], Awaitable[Any]],
        event: Message | CallbackQuery,
        data: Dict[str, Any]
    ) -> Any:
        if isinstance(event, Message):
            self.store.get(event.chat.id)
        elif isinstance(event, CallbackQuery):
            self.store.get(event.message.chat.id if event.message else event.from_user.id)
        return await handler(event, data)
