from flask import request

from bidarena.services.game.errors import ValidationError


def json_body() -> dict:
    """Request JSON as a dict; an empty body reads as {}."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def require_int(data: dict, key: str) -> int:
    value = data.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f'{key} must be an integer')
    return value
