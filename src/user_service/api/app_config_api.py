"""
Environment-scoped configuration entries (read only).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from core.dependencies import get_app_config_repository
from repositories.app_config_repository import AppConfigRepository
from schemas.common import AppConfigResponse


router = APIRouter(
    prefix="/app-config",
    tags=["App Config"]
)


@router.get("/{environment}", response_model=List[AppConfigResponse])
def list_app_config(environment: str, repo: AppConfigRepository = Depends(get_app_config_repository)):
    return repo.find_by_environment(environment)


@router.get("/{environment}/{config_key}", response_model=AppConfigResponse)
def get_app_config(
    environment: str,
    config_key: str,
    repo: AppConfigRepository = Depends(get_app_config_repository),
):
    entry = repo.find_by_key_and_environment(config_key, environment)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Config '{config_key}' not found for environment '{environment}'",
        )
    return entry
