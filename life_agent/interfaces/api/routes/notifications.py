"""Endpoints and websocket handler for user notifications."""

from __future__ import annotations

import logging
from typing import Any

from anyio import from_thread, to_thread
from fastapi import APIRouter, Depends, HTTPException, Request, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from life_agent.application.use_cases.notifications import (
    NotificationDispatcher,
    count_unread,
    list_notifications,
    list_unread,
    list_upcoming,
    mark_all_as_read,
    mark_as_read,
)
from life_agent.domain.entities import Notification, User
from life_agent.domain.errors import LifeAgentError, NotFoundError
from life_agent.infrastructure.database import get_db
from life_agent.infrastructure.notifications import (
    NOTIFICATIONS_READ_EVENT,
    serialize_notification,
    user_topic,
)
from life_agent.interfaces.api.dependencies import (
    get_current_active_user,
    get_dispatcher,
    resolve_current_user,
)
from life_agent.interfaces.api.schemas import (
    MarkAllReadResponse,
    NotificationCreate,
    NotificationEnvelope,
    NotificationList,
    NotificationRead,
    NotificationReadResponse,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

_WS_POLICY_VIOLATION = 1008
_WS_INTERNAL_ERROR = 1011


async def _announce_read(request_app: Any, user_id: int, payload: dict[str, Any]) -> None:
    """Tell the user's open clients that notifications were read.

    Sync handlers reach it through ``anyio.from_thread``.
    """

    publisher = getattr(request_app.state, "realtime_publisher", None)
    if publisher is None:
        return
    try:
        await publisher.publish(user_topic(user_id), NOTIFICATIONS_READ_EVENT, payload)
    except Exception:
        logger.exception("Failed to publish read event to user %s", user_id)


@router.post("", response_model=NotificationEnvelope)
async def create_notification(
    payload: NotificationCreate,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> NotificationEnvelope:
    """Create a notification for the caller and deliver it on every channel."""

    outcome = await dispatcher.dispatch(current_user.id, payload.to_content())
    failed = outcome.failed_deliveries
    if failed:
        logger.info(
            "Notification %s reached %s of %s push endpoint(s)",
            outcome.notification.id,
            len(outcome.deliveries) - len(failed),
            len(outcome.deliveries),
        )
    return NotificationEnvelope(notification=NotificationRead.from_entity(outcome.notification))


@router.get("", response_model=NotificationList)
def get_unread_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationList:
    """Return the caller's unread notifications, newest first."""

    notifications = list_unread(db, current_user.id)
    return NotificationList(
        notifications=[NotificationRead.from_entity(n) for n in notifications]
    )


@router.get("/all", response_model=NotificationList)
def get_all_notifications(
    limit: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationList:
    notifications = list_notifications(db, current_user.id, limit=limit)
    return NotificationList(
        notifications=[NotificationRead.from_entity(n) for n in notifications]
    )


@router.get("/upcoming", response_model=NotificationList)
def get_upcoming_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationList:
    """Return scheduled notifications that have not been delivered yet."""

    notifications = list_upcoming(db, current_user.id)
    return NotificationList(
        notifications=[NotificationRead.from_entity(n) for n in notifications]
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=count_unread(db, current_user.id))


@router.post("/read-all", response_model=MarkAllReadResponse)
def read_all_notifications(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkAllReadResponse:
    """Mark every unread notification of the caller as read."""

    updated = mark_all_as_read(db, current_user.id)
    if updated:
        from_thread.run(_announce_read, request.app, current_user.id, {"all": True})
    return MarkAllReadResponse(updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationReadResponse)
def read_notification(
    notification_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationReadResponse:
    """Mark one of the caller's notifications as read."""

    notification = mark_as_read(db, notification_id, requesting_user_id=current_user.id)
    from_thread.run(
        _announce_read, request.app, current_user.id, {"ids": [notification.id]}
    )
    return NotificationReadResponse(notification=NotificationRead.from_entity(notification))


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Stream the caller's notification topic over a websocket.

    The token travels as the ``token`` query parameter because browsers
    cannot set headers on websocket requests. After connecting the client
    receives an ``init`` message with its unread backlog, then
    ``new-notification`` and ``notifications-read`` events. Clients may send
    ``ping`` and ``{"type": "ack", "ids": [...]}``; acknowledged ids are
    announced to the user's other clients.
    """

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=_WS_POLICY_VIOLATION)
        return

    state = websocket.app.state
    try:
        user, backlog = await to_thread.run_sync(_open_stream, state, token)
    except HTTPException:
        await websocket.close(code=_WS_POLICY_VIOLATION)
        return
    except LifeAgentError:
        logger.exception("Could not open notification stream")
        await websocket.close(code=_WS_INTERNAL_ERROR)
        return

    topic = user_topic(user.id)
    manager = state.realtime_manager
    await manager.connect(topic, websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": [serialize_notification(n) for n in backlog]}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "ack":
                acknowledged = await to_thread.run_sync(
                    _acknowledge, state.database, user.id, message.get("ids")
                )
                if acknowledged:
                    await _announce_read(websocket.app, user.id, {"ids": acknowledged})
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(topic, websocket)


def _open_stream(state: Any, token: str) -> tuple[User, list[Notification]]:
    session = state.database.session()
    try:
        user = resolve_current_user(token, session, state.settings)
        if not user.is_active:
            raise HTTPException(status_code=400, detail="Inactive user")
        return user, list_unread(session, user.id)
    finally:
        session.close()


def _acknowledge(database: Any, user_id: int, ids: Any) -> list[int]:
    """Mark the caller's notifications in ``ids`` read and return those that were."""

    if not isinstance(ids, list) or not ids:
        return []
    acknowledged: list[int] = []
    session = database.session()
    try:
        for notification_id in ids:
            if not isinstance(notification_id, int):
                continue
            try:
                mark_as_read(session, notification_id, requesting_user_id=user_id)
            except NotFoundError:
                logger.debug("Ignoring ack of unknown notification %s", notification_id)
                continue
            acknowledged.append(notification_id)
    finally:
        session.close()
    return acknowledged
