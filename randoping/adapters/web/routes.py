"""Ping trigger API routes."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from randoping.domain.models import (
    DEFAULT_AVG_MINUTES,
    DEFAULT_ICON,
    DEFAULT_MESSAGE,
    DEFAULT_NAME,
    DEFAULT_QUIET_END_HOUR,
    DEFAULT_QUIET_START_HOUR,
    MAX_AVG_MINUTES,
    InvalidConfiguration,
    PingColors,
    PingConfig,
    Schedule,
    ScheduleAction,
    new_ping_id,
    resolve_icon,
)
from randoping.service import PingService, UnknownPing

ping_router = APIRouter(prefix="/pings", tags=["Pings"])

_service: Optional[PingService] = None


def set_service(service: PingService) -> None:
    global _service
    _service = service


def get_service() -> PingService:
    if _service is None:
        raise HTTPException(status_code=503, detail="Ping service not initialized")
    return _service


class PingConfigBody(BaseModel):
    name: str = DEFAULT_NAME
    message: str = DEFAULT_MESSAGE
    avg_minutes: float = Field(DEFAULT_AVG_MINUTES, gt=0, le=MAX_AVG_MINUTES, allow_inf_nan=False)
    quiet_start_hour: int = Field(DEFAULT_QUIET_START_HOUR, ge=0, le=23)
    quiet_end_hour: int = Field(DEFAULT_QUIET_END_HOUR, ge=0, le=23)
    enabled: bool = True
    color_value: Optional[int] = None
    icon_name: str = DEFAULT_ICON


class BootPingBody(PingConfigBody):
    id: Optional[str] = None


class BootRequest(BaseModel):
    pings: List[BootPingBody]


class PingConfigResponse(PingConfigBody):
    id: str
    color_value: int


class PingStatusResponse(BaseModel):
    config: PingConfigResponse
    next_fire_at: Optional[datetime] = None


class DecisionResponse(BaseModel):
    config_id: str
    action: str  # "schedule" | "cancel"
    fire_at: Optional[datetime] = None


class ColorResponse(BaseModel):
    color_value: int


def _to_config(config_id: str, body: PingConfigBody, existing: List[PingConfig]) -> PingConfig:
    data = body.model_dump()
    if data["color_value"] is None:
        others = [c for c in existing if c.id != config_id]
        data["color_value"] = PingColors.next_unused_color(others)
    data["id"] = config_id
    data["icon_name"] = resolve_icon(data["icon_name"])
    return PingConfig.from_dict(data)


def _decision(decision: ScheduleAction) -> DecisionResponse:
    if isinstance(decision, Schedule):
        return DecisionResponse(
            config_id=decision.config_id, action="schedule", fire_at=decision.fire_at
        )
    return DecisionResponse(config_id=decision.config_id, action="cancel")


@ping_router.get("", response_model=List[PingStatusResponse])
async def list_pings(service: PingService = Depends(get_service)):
    pending = service.pending()
    return [
        PingStatusResponse(
            config=PingConfigResponse(**c.to_dict()),
            next_fire_at=pending.get(c.id),
        )
        for c in service.list_configs()
    ]


@ping_router.get("/colors/next", response_model=ColorResponse)
async def next_color(service: PingService = Depends(get_service)):
    return ColorResponse(color_value=PingColors.next_unused_color(service.list_configs()))


@ping_router.post("/boot", response_model=List[DecisionResponse])
async def boot(req: BootRequest, service: PingService = Depends(get_service)):
    configs: List[PingConfig] = []
    for body in req.pings:
        config_id = body.id or new_ping_id()
        configs.append(_to_config(config_id, body, configs))
    try:
        decisions = service.on_boot(configs)
    except InvalidConfiguration as e:
        raise HTTPException(status_code=422, detail=str(e))
    return [_decision(d) for d in decisions]


@ping_router.put("/{config_id}", response_model=DecisionResponse)
async def put_ping(
    config_id: str, body: PingConfigBody, service: PingService = Depends(get_service)
):
    config = _to_config(config_id, body, service.list_configs())
    try:
        decision = service.on_config_changed(config)
    except InvalidConfiguration as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _decision(decision)


@ping_router.delete("/{config_id}", response_model=DecisionResponse)
async def delete_ping(config_id: str, service: PingService = Depends(get_service)):
    try:
        decision = service.on_config_deleted(config_id)
    except UnknownPing:
        raise HTTPException(status_code=404, detail=f"Unknown ping: {config_id}")
    return _decision(decision)


@ping_router.post("/{config_id}/fire", response_model=DecisionResponse)
async def fire_ping(config_id: str, service: PingService = Depends(get_service)):
    decision = await service.on_alarm_fired(config_id)
    if decision is None:
        raise HTTPException(status_code=404, detail=f"Unknown ping: {config_id}")
    return _decision(decision)


@ping_router.get("/{config_id}/preview", response_model=DecisionResponse)
async def preview_ping(config_id: str, service: PingService = Depends(get_service)):
    """Draw a fresh decision without registering it."""
    try:
        config = service.get_config(config_id)
    except UnknownPing:
        raise HTTPException(status_code=404, detail=f"Unknown ping: {config_id}")
    return _decision(service.scheduler.decide_schedule_action(config))
