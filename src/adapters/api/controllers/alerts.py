from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_alerts_service
from src.adapters.api.schemas.transit import MessageSchema, ServiceAlertSchema, iso_utc
from src.app.services.alerts_service import AlertsService
from src.domain.models import ServiceAlert

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


def _alert_to_schema(alert: ServiceAlert) -> ServiceAlertSchema:
    return ServiceAlertSchema(
        id=alert.id,
        route_id=alert.route_id,
        alert_type=alert.alert_type.value,
        header_text=alert.header_text,
        description_text=alert.description_text,
        active_period_start=(
            iso_utc(alert.active_period_start) if alert.active_period_start else None
        ),
        active_period_end=(
            iso_utc(alert.active_period_end) if alert.active_period_end else None
        ),
        severity=alert.severity,
    )


@router.get(
    "",
    response_model=list[ServiceAlertSchema],
    response_model_exclude_none=True,
    responses={502: {"model": MessageSchema}},
)
async def list_alerts(
    service: AlertsService = Depends(get_alerts_service),
) -> list[ServiceAlertSchema]:
    return [_alert_to_schema(a) for a in await service.list_alerts()]


@router.get(
    "/{route_id}",
    response_model=list[ServiceAlertSchema],
    response_model_exclude_none=True,
    responses={502: {"model": MessageSchema}},
)
async def list_alerts_for_route(
    route_id: str,
    service: AlertsService = Depends(get_alerts_service),
) -> list[ServiceAlertSchema]:
    alerts = await service.list_alerts_for_route(route_id=route_id)
    return [_alert_to_schema(a) for a in alerts]
