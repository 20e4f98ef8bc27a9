"""Application service – request validation, orchestration, responses."""
from quota_guard.application.service.requests import Action, ClientContext, QuotaRequest
from quota_guard.application.service.responses import QuotaResponse, iso_instant
from quota_guard.application.service.service import QuotaService

__all__ = ["Action", "ClientContext", "QuotaRequest", "QuotaResponse", "QuotaService", "iso_instant"]
