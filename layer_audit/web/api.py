"""Report API: summary, grouped report, package listing and detail."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from layer_audit.pipeline import AuditResult
from layer_audit.web.state import state

router = APIRouter(prefix="/api")


class DependencyOut(BaseModel):
    name: str
    unlearned: bool


class EntryOut(BaseModel):
    name: str
    depth: int
    imported: bool
    dependencies: list[DependencyOut]


class DepthGroupOut(BaseModel):
    depth: int
    packages: list[EntryOut]


class PackageOut(BaseModel):
    name: str
    identity: str
    depth: int
    imported: bool
    internal: bool
    learned: bool
    predeclared: bool
    vendor: bool
    dependencies: list[str]
    dependents: list[str]


def _result() -> AuditResult:
    if state.result is None:
        raise HTTPException(503, "No audit result loaded")
    return state.result


@router.get("/summary")
async def get_summary():
    result = _result()
    return {"root": result.config.root, **result.summary.to_dict()}


@router.get("/report", response_model=list[DepthGroupOut])
async def get_report():
    groups: dict[int, list[dict]] = {}
    for entry in _result().entries:
        groups.setdefault(entry.depth, []).append(entry.to_dict())
    return [{"depth": depth, "packages": groups[depth]} for depth in sorted(groups)]


@router.get("/packages", response_model=list[PackageOut])
async def list_packages():
    result = _result()
    return [result.describe(pkg) for pkg in result.registry.packages()]


@router.get("/packages/{name:path}", response_model=list[PackageOut])
async def get_package(name: str):
    result = _result()
    matches = state.find(name)
    if not matches:
        raise HTTPException(404, f"No package named {name!r}")
    return [result.describe(pkg) for pkg in matches]
