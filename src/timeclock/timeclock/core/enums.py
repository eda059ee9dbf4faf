from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Perfil do utilizador usado na matriz de acessos."""

    ADMIN = "Administrador"
    MANAGER = "Gestor"
    OPERATOR = "Operador"


class AppPermission(str, Enum):
    # CRM
    VIEW_DASHBOARD = "VIEW_DASHBOARD"
    VIEW_QUOTES = "VIEW_QUOTES"
    EDIT_QUOTES = "EDIT_QUOTES"
    VIEW_SALES = "VIEW_SALES"
    VIEW_CUSTOMERS = "VIEW_CUSTOMERS"
    VIEW_EMAILS = "VIEW_EMAILS"

    # RH
    VIEW_TIMECLOCK = "VIEW_TIMECLOCK"
    VIEW_ATTENDANCE = "VIEW_ATTENDANCE"
    MANAGE_ABSENCES = "MANAGE_ABSENCES"
    MANAGE_VACATIONS = "MANAGE_VACATIONS"

    # Sistema
    MANAGE_SETTINGS = "MANAGE_SETTINGS"
    MANAGE_USERS = "MANAGE_USERS"
    MANAGE_ACL = "MANAGE_ACL"


class PunchDirection(str, Enum):
    """Tipo de movimento do relógio de ponto."""

    CHECK_IN = "ENTRADA"
    CHECK_OUT = "SAIDA"


class PunchMethod(str, Enum):
    FACIAL = "FACIAL"
    MANUAL = "MANUAL"


class ApprovalStatus(str, Enum):
    """Estado do circuito de aprovação (ausências/férias)."""

    PENDING = "PENDENTE"
    APPROVED = "APROVADO"
    REJECTED = "REJEITADO"


class AbsenceKind(str, Enum):
    SICKNESS = "DOENCA"
    FAMILY = "FAMILIA"
    OTHER = "OUTRO"


class WorkflowStep(str, Enum):
    """Passos do assistente de registo de ponto."""

    SELECT_DIRECTION = "SELECT_DIRECTION"
    SELECT_EMPLOYEE = "SELECT_EMPLOYEE"
    CAPTURING = "CAPTURING"
    SUBMITTING = "SUBMITTING"
    COMPLETED = "COMPLETED"


class MessageKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
