"""Endpoints for delivering, queueing and reading notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatchService,
    list_preferences,
    set_preference,
)
from app.domain.entities import (
    Notification,
    NotificationPreference,
    NotificationRequest,
    NotificationStatus,
    User,
)
from app.domain.exceptions import UserNotFoundError
from app.infrastructure.database import get_db
from app.infrastructure.repositories import NotificationPreferenceRepository
from app.interfaces.api.dependencies import (
    get_current_user,
    get_dispatch_service,
    require_admin,
)
from app.interfaces.api.schemas import (
    NotificationBulkSendRequest,
    NotificationBulkSendResponse,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationRead,
    NotificationSendRequest,
    NotificationSendResponse,
    NotificationStatsRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        user_id=notification.user_id,
        type=notification.type,
        subject=notification.subject,
        content=notification.content,
        recipient=notification.recipient,
        status=notification.status.value,
        priority=notification.priority.label,
        attempts=notification.attempts,
        error_message=notification.error_message,
        template_id=notification.template_id,
        created_at=notification.created_at,
        sent_at=notification.sent_at,
        read_at=notification.read_at,
    )


def _preference_to_schema(preference: NotificationPreference) -> NotificationPreferenceRead:
    return NotificationPreferenceRead.model_validate(preference)


def _build_request(payload: NotificationSendRequest, user_id: int) -> NotificationRequest:
    return NotificationRequest(
        user_id=user_id,
        type=payload.type,
        subject=payload.subject,
        content=payload.content,
        recipient=payload.recipient,
        template_id=payload.template_id,
        template_data=payload.template_data,
        priority=payload.priority,
    )


@router.post("/send", response_model=NotificationSendResponse)
async def send_notification(
    payload: NotificationSendRequest,
    current_user: User = Depends(get_current_user),
    service: NotificationDispatchService = Depends(get_dispatch_service),
) -> NotificationSendResponse:
    """Deliver a notification to the authenticated user right away."""

    sent = await service.send(_build_request(payload, current_user.id))
    if not sent:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No se pudo enviar la notificación",
        )
    return NotificationSendResponse(message="Notificación enviada exitosamente")


@router.post("/send-bulk", response_model=NotificationBulkSendResponse)
async def send_bulk_notification(
    payload: NotificationBulkSendRequest,
    _: User = Depends(require_admin),
    service: NotificationDispatchService = Depends(get_dispatch_service),
) -> NotificationBulkSendResponse:
    user_ids = payload.unique_user_ids()
    success = await service.send_bulk(
        [_build_request(payload, user_id) for user_id in user_ids]
    )
    message = (
        "Notificaciones enviadas exitosamente"
        if success
        else "Algunas notificaciones no pudieron ser enviadas"
    )
    return NotificationBulkSendResponse(
        message=message, success=success, user_count=len(user_ids)
    )


@router.post(
    "/queue", response_model=NotificationRead, status_code=status.HTTP_202_ACCEPTED
)
async def queue_notification(
    payload: NotificationSendRequest,
    current_user: User = Depends(get_current_user),
    service: NotificationDispatchService = Depends(get_dispatch_service),
) -> NotificationRead:
    """Store a notification for the background processor."""

    try:
        notification = await service.queue(_build_request(payload, current_user.id))
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _notification_to_schema(notification)


@router.get("/history", response_model=list[NotificationRead])
def list_notification_history(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status_filter: NotificationStatus | None = Query(None, alias="status"),
    type_filter: str | None = Query(None, alias="type"),
    current_user: User = Depends(get_current_user),
    service: NotificationDispatchService = Depends(get_dispatch_service),
) -> list[NotificationRead]:
    """Return the notifications of the authenticated user, newest first."""

    notifications = service.get_user_notifications(
        current_user.id,
        page=page,
        page_size=page_size,
        status=status_filter,
        notification_type=type_filter,
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/stats", response_model=NotificationStatsRead)
def read_notification_stats(
    current_user: User = Depends(get_current_user),
    service: NotificationDispatchService = Depends(get_dispatch_service),
) -> NotificationStatsRead:
    return NotificationStatsRead.model_validate(service.get_stats(current_user.id))


@router.get("/preferences", response_model=list[NotificationPreferenceRead])
def read_preferences(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[NotificationPreferenceRead]:
    preferences = list_preferences(
        NotificationPreferenceRepository(db), user_id=current_user.id
    )
    return [_preference_to_schema(preference) for preference in preferences]


@router.put("/preferences", response_model=NotificationPreferenceRead)
def update_preference(
    payload: NotificationPreferenceUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> NotificationPreferenceRead:
    try:
        preference = set_preference(
            NotificationPreferenceRepository(db),
            user_id=current_user.id,
            notification_type=payload.notification_type,
            event_type=payload.event_type,
            is_enabled=payload.is_enabled,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _preference_to_schema(preference)


@router.get("/{notification_id}", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    service: NotificationDispatchService = Depends(get_dispatch_service),
) -> NotificationRead:
    notification = service.get_notification(notification_id)
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Notificación no encontrada"
        )
    if notification.user_id != current_user.id and not current_user.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No autorizado")
    return _notification_to_schema(notification)


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notification_as_read(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    service: NotificationDispatchService = Depends(get_dispatch_service),
) -> None:
    if not service.mark_read(notification_id, current_user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Notificación no encontrada"
        )
