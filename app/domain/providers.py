"""Delivery provider contract and the registry used to select one."""

from __future__ import annotations

import abc
from collections.abc import Iterable, Iterator

from app.domain.entities import NotificationMessage, NotificationResult


class NotificationProvider(abc.ABC):
    """Strategy delivering messages over a single channel."""

    type: str = ""

    def can_handle(self, notification_type: str) -> bool:
        """Return ``True`` when ``notification_type`` names this channel."""

        return (notification_type or "").casefold() == self.type.casefold()

    @abc.abstractmethod
    async def send(self, message: NotificationMessage) -> NotificationResult:
        """Deliver ``message`` and report the outcome without raising."""


class ProviderRegistry:
    """Ordered collection of providers; the first matching provider wins."""

    def __init__(self, providers: Iterable[NotificationProvider] = ()) -> None:
        self._providers: list[NotificationProvider] = list(providers)

    def register(self, provider: NotificationProvider) -> None:
        self._providers.append(provider)

    def resolve(self, notification_type: str) -> NotificationProvider | None:
        for provider in self._providers:
            if provider.can_handle(notification_type):
                return provider
        return None

    @property
    def types(self) -> list[str]:
        return [provider.type for provider in self._providers]

    def __iter__(self) -> Iterator[NotificationProvider]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)


__all__ = ["NotificationProvider", "ProviderRegistry"]
