from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Mapping

from flask import jsonify, request

from ..core.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    SessionLockedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_response(status: int = 200, **payload: Any):
    payload.setdefault("success", status < 400)
    return jsonify(payload), status


def json_body() -> Mapping[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, Mapping):
        return {}
    return data


def json_errors(view):
    """Translate domain exceptions raised by a view into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return json_response(400, message=str(e))
        except NotFoundError as e:
            return json_response(404, message=str(e))
        except SessionLockedError as e:
            return json_response(423, message=str(e), locked=True)
        except AuthorizationError as e:
            return json_response(403, message=str(e))
        except InvalidTransitionError as e:
            return json_response(409, message=str(e))
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return json_response(500, message="Erro interno do sistema")

    return wrapper
