"""
Erreurs du traitement des résultats.

Chaque erreur porte un code stable, un message lisible et le statut HTTP
à renvoyer; les vues les transforment en réponse JSON via ``as_dict()``.
"""


class ResultProcessingError(Exception):
    code = "error"
    status_code = 400
    retryable = False

    def __init__(self, detail, **extra):
        super().__init__(detail)
        self.detail = detail
        self.extra = extra

    def as_dict(self):
        data = {"code": self.code, "detail": self.detail, "retryable": self.retryable}
        data.update(self.extra)
        return data


class InvalidScope(ResultProcessingError):
    code = "invalid_input"


class ScopeNotFound(ResultProcessingError):
    code = "not_found"
    status_code = 404


class NoScheduleConfigured(ResultProcessingError):
    code = "no_schedule"
    status_code = 404


class NoStudentsFound(ResultProcessingError):
    code = "no_students"
    status_code = 404


class IncompleteMarks(ResultProcessingError):
    """Liste complète des couples (élève, matière) sans note."""
    code = "incomplete_marks"

    def __init__(self, missing):
        super().__init__(
            f"Cannot process results. Missing marks for {len(missing)} student-subject combinations. "
            "Please enter all marks first.",
            missing=missing,
        )
        self.missing = missing


class GradingConfigurationError(ResultProcessingError):
    code = "configuration"


class ResultStorageConflict(ResultProcessingError):
    code = "storage_conflict"
    status_code = 409
    retryable = True


class ScopeBusy(ResultProcessingError):
    code = "scope_busy"
    status_code = 409
    retryable = True


class RankingFailed(ResultProcessingError):
    code = "ranking_failed"
    status_code = 503
    retryable = True
