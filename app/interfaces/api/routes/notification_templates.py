"""Rutas para administrar plantillas de notificación."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.application.use_cases.notifications import TemplateService, canonical_type
from app.domain.entities import NotificationTemplate, User
from app.domain.exceptions import (
    TemplateConflictError,
    TemplateError,
    TemplateNotFoundError,
)
from app.interfaces.api.dependencies import get_template_service, require_admin
from app.interfaces.api.schemas import (
    NotificationTemplateCreate,
    NotificationTemplateRead,
    NotificationTemplateRenderRequest,
    NotificationTemplateRenderResponse,
    NotificationTemplateUpdate,
)

router = APIRouter(prefix="/notifications/templates", tags=["notification-templates"])


def _template_to_read_model(template: NotificationTemplate) -> NotificationTemplateRead:
    return NotificationTemplateRead.model_validate(template)


def _template_http_error(exc: TemplateError) -> HTTPException:
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, TemplateNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, TemplateConflictError):
        status_code = status.HTTP_409_CONFLICT
    return HTTPException(status_code=status_code, detail=str(exc))


def _normalized_type(value: str) -> str:
    return canonical_type(value) or value


@router.get("", response_model=list[NotificationTemplateRead])
def list_templates(
    type_filter: str | None = Query(None, alias="type"),
    _: User = Depends(require_admin),
    service: TemplateService = Depends(get_template_service),
) -> list[NotificationTemplateRead]:
    templates = service.get_templates(
        _normalized_type(type_filter) if type_filter else None
    )
    return [_template_to_read_model(template) for template in templates]


@router.post(
    "", response_model=NotificationTemplateRead, status_code=status.HTTP_201_CREATED
)
def create_template(
    template_in: NotificationTemplateCreate,
    _: User = Depends(require_admin),
    service: TemplateService = Depends(get_template_service),
) -> NotificationTemplateRead:
    try:
        template = service.create_template(
            NotificationTemplate(
                id=None,
                template_id=template_in.template_id.strip(),
                name=template_in.name.strip(),
                type=_normalized_type(template_in.type),
                subject=template_in.subject,
                content=template_in.content,
                is_active=template_in.is_active,
            )
        )
    except TemplateError as exc:
        raise _template_http_error(exc) from exc
    return _template_to_read_model(template)


@router.put("/{template_id}", response_model=NotificationTemplateRead)
def update_template(
    template_id: str,
    template_in: NotificationTemplateUpdate,
    _: User = Depends(require_admin),
    service: TemplateService = Depends(get_template_service),
) -> NotificationTemplateRead:
    try:
        template = service.update_template(
            NotificationTemplate(
                id=None,
                template_id=template_id,
                name=template_in.name.strip(),
                type=_normalized_type(template_in.type),
                subject=template_in.subject,
                content=template_in.content,
                is_active=template_in.is_active,
            )
        )
    except TemplateError as exc:
        raise _template_http_error(exc) from exc
    return _template_to_read_model(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(
    template_id: str,
    _: User = Depends(require_admin),
    service: TemplateService = Depends(get_template_service),
) -> Response:
    if not service.delete_template(template_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Plantilla no encontrada"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{template_id}/render", response_model=NotificationTemplateRenderResponse)
def render_template(
    template_id: str,
    payload: NotificationTemplateRenderRequest,
    _: User = Depends(require_admin),
    service: TemplateService = Depends(get_template_service),
) -> NotificationTemplateRenderResponse:
    try:
        content = service.render(template_id, payload.data)
    except TemplateError as exc:
        raise _template_http_error(exc) from exc

    subject = None
    if payload.type:
        subject = service.render_subject(
            template_id, _normalized_type(payload.type), payload.data
        )
    return NotificationTemplateRenderResponse(
        template_id=template_id, subject=subject, content=content
    )
