class GameError(Exception):
    """Base for every rejection raised by the game services."""

    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(GameError):
    """Malformed or out-of-range input."""

    status_code = 400


class RuleViolation(GameError):
    """Well-formed request refused by a rule of play."""

    status_code = 400


class Unauthorized(GameError):
    status_code = 403


class NotFound(GameError):
    status_code = 404
