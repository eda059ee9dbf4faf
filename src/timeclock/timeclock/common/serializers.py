"""JSON shapes returned by the web layer."""
from __future__ import annotations

from typing import Any, Optional

from ..access.model import RoleAccessConfig
from ..employees.model import Employee
from ..leave.model import Absence, VacationRequest
from ..punches.model import DayStatistics, PunchEvent
from ..workflow.state import WorkflowSnapshot


def employee_to_dict(e: Employee) -> dict[str, Any]:
    return {
        "id": e.employee_id,
        "nome": e.name,
        "email": e.email,
        "cargo": e.job_title,
        "departamento": e.department,
        "foto_url": e.photo_url,
        "saldo_ferias": e.vacation_balance,
        "biometria_registada": e.has_biometrics,
        "ativo": e.active,
    }


def punch_to_dict(p: PunchEvent, *, include_image: bool = False) -> dict[str, Any]:
    data = {
        "id": p.punch_id,
        "colaborador_id": p.employee_id,
        "data_hora": p.timestamp.isoformat(),
        "tipo": p.direction.value,
        "metodo": p.method.value,
        "confianca_facial": p.confidence_score,
        "latitude": p.latitude,
        "longitude": p.longitude,
    }
    if include_image:
        data["foto_captura"] = p.image_data
    return data


def day_statistics_to_dict(s: DayStatistics) -> dict[str, Any]:
    return {
        "total_movimentos": s.total_punches,
        "colaboradores_distintos": s.distinct_employees,
        "ultimo_movimento": s.last_punch_at.isoformat() if s.last_punch_at else None,
    }


def absence_to_dict(a: Absence) -> dict[str, Any]:
    return {
        "id": a.absence_id,
        "colaborador_id": a.employee_id,
        "colaborador_nome": a.employee_name,
        "data_inicio": a.start_date.isoformat(),
        "data_fim": a.end_date.isoformat(),
        "tipo": a.kind.value,
        "motivo": a.reason,
        "comprovativo_url": a.proof_url,
        "estado": a.status.value,
    }


def vacation_to_dict(v: VacationRequest) -> dict[str, Any]:
    return {
        "id": v.request_id,
        "colaborador_id": v.employee_id,
        "colaborador_nome": v.employee_name,
        "data_inicio": v.start_date.isoformat(),
        "data_fim": v.end_date.isoformat(),
        "dias_uteis": v.working_days,
        "estado": v.status.value,
        "observacoes": v.notes,
    }


def access_config_to_dict(c: RoleAccessConfig) -> dict[str, Any]:
    return {"role": c.role.value, "permissions": sorted(p.value for p in c.permissions)}


def snapshot_to_dict(s: WorkflowSnapshot, *, employees: Optional[list[Employee]] = None) -> dict[str, Any]:
    data = {
        "step": s.step.value,
        "direction": s.direction.value if s.direction else None,
        "employee": employee_to_dict(s.employee) if s.employee else None,
        "stream_live": s.stream_live,
        "can_confirm": s.can_confirm,
        "processing": s.processing,
        "location": {"latitude": s.location.latitude, "longitude": s.location.longitude} if s.location else None,
        "location_error": s.location_error,
        "camera_error": s.camera_error,
        "message": {"type": s.message.kind.value, "text": s.message.text} if s.message else None,
        "last_punch": punch_to_dict(s.last_punch) if s.last_punch else None,
        "search_term": s.search_term,
    }
    if employees is not None:
        data["employees"] = [employee_to_dict(e) for e in employees]
    return data
