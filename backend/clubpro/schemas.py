"""Pydantic response schemas."""

from typing import Dict, List

from pydantic import BaseModel


# ── Root ─────────────────────────────────────────────────────────────────────

class ClubInfo(BaseModel):
    name: str
    colors: str
    system: str


class RootResponse(BaseModel):
    message: str
    status: str
    version: str
    timestamp: str
    features: List[str]
    club: ClubInfo


# ── Health / status ──────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    database: str
    services: Dict[str, str]


class DatabaseStatus(BaseModel):
    status: str


class StatusResponse(BaseModel):
    service: str
    club: str
    status: str
    environment: str
    deployment: str
    timestamp: str
    database: DatabaseStatus
    modules: Dict[str, str]


# ── Club branding ────────────────────────────────────────────────────────────

class ClubColors(BaseModel):
    primary: str
    secondary: str


class DeploymentInfo(BaseModel):
    platform: str
    status: str


class VVCResponse(BaseModel):
    club: str
    system: str
    capabilities: Dict[str, str]
    colors: ClubColors
    deployment: DeploymentInfo


# ── Errors ───────────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    error: str
    message: str


class ApiNotFoundResponse(ErrorResponse):
    available_routes: List[str]
