"""
Notificações push / Push notifications.

Colaborador "dispara e esquece" : falhas são registradas e engolidas,
inscrições expiradas (404/410) são removidas.
Fire-and-forget collaborator: failures are logged and swallowed, expired
subscriptions (404/410) are pruned.
"""

import abc
import asyncio
import json
import logging

from pywebpush import WebPushException, webpush
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from lab_scheduler.models.push_subscription import PushSubscription

log = logging.getLogger(__name__)

ICON = "/assets/icons/icon-96x96.png"


class Notifier(abc.ABC):

    @abc.abstractmethod
    async def notify_all(self, title: str, body: str) -> int:
        """Enviar para todos os inscritos / Send to every subscriber."""

    @abc.abstractmethod
    async def notify_user(self, user_id: int, title: str, body: str) -> int:
        """Enviar para um usuário / Send to one user."""


class LogNotifier(Notifier):
    """Sem chaves VAPID : apenas registra / Without VAPID keys: log only."""

    async def notify_all(self, title: str, body: str) -> int:
        log.info("notify_all: %s - %s", title, body)
        return 0

    async def notify_user(self, user_id: int, title: str, body: str) -> int:
        log.info("notify_user(%s): %s - %s", user_id, title, body)
        return 0


class WebPushNotifier(Notifier):
    """Entrega via Web Push (VAPID) / Delivery through Web Push (VAPID)."""

    def __init__(self, session_factory: async_sessionmaker, vapid_private_key: str, contact_email: str):
        self.session_factory = session_factory
        self.vapid_private_key = vapid_private_key
        self.contact_email = contact_email

    async def notify_all(self, title: str, body: str) -> int:
        async with self.session_factory() as session:
            result = await session.execute(select(PushSubscription))
            subscriptions = list(result.scalars().all())
        return await self._deliver(subscriptions, title, body)

    async def notify_user(self, user_id: int, title: str, body: str) -> int:
        async with self.session_factory() as session:
            result = await session.execute(select(PushSubscription).where(PushSubscription.user_id == user_id))
            subscriptions = list(result.scalars().all())
        return await self._deliver(subscriptions, title, body)

    async def _deliver(self, subscriptions: list[PushSubscription], title: str, body: str) -> int:
        payload = json.dumps({"title": title, "body": body, "icon": ICON, "data": {"url": "/"}}, ensure_ascii=False)
        results = await asyncio.gather(*(self._send(s, payload) for s in subscriptions))
        stale = [s.endpoint for s, status in zip(subscriptions, results) if status in (404, 410)]
        if stale:
            async with self.session_factory() as session:
                await session.execute(delete(PushSubscription).where(PushSubscription.endpoint.in_(stale)))
                await session.commit()
            log.info("Pruned %d expired push subscriptions", len(stale))
        return sum(1 for status in results if status is None)

    async def _send(self, subscription: PushSubscription, payload: str) -> int | None:
        """Retorna None se entregue, senão o status HTTP / Returns None when delivered, else HTTP status."""
        try:
            await asyncio.to_thread(
                webpush,
                subscription_info={
                    "endpoint": subscription.endpoint,
                    "keys": {"p256dh": subscription.p256dh, "auth": subscription.auth},
                },
                data=payload,
                vapid_private_key=self.vapid_private_key,
                vapid_claims={"sub": self.contact_email},
            )
        except WebPushException as exc:
            status = exc.response.status_code if exc.response is not None else 0
            log.warning("Push delivery failed (%s) for user %s", status, subscription.user_id)
            return status
        return None


class BackgroundNotifier(Notifier):
    """Agenda o envio sem bloquear a requisição / Schedules delivery without blocking the request."""

    def __init__(self, inner: Notifier):
        self.inner = inner
        self._tasks: set[asyncio.Task] = set()

    def _spawn(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._done)

    def _done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.error("Background notification failed", exc_info=task.exception())

    async def notify_all(self, title: str, body: str) -> int:
        self._spawn(self.inner.notify_all(title, body))
        return 0

    async def notify_user(self, user_id: int, title: str, body: str) -> int:
        self._spawn(self.inner.notify_user(user_id, title, body))
        return 0
