# backend/boothmedia/dependencies.py
"""
FastAPI dependency providers.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .config import Settings
from .runtime import BoothRuntime


def get_runtime(request: Request) -> BoothRuntime:
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Booth runtime is not running",
        )
    return runtime


def get_settings(request: Request) -> Settings:
    return get_runtime(request).settings


RuntimeDep = Annotated[BoothRuntime, Depends(get_runtime)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
