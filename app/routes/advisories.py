"""Crop advisory routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.dependencies import get_current_user
from app.auth.models import User
from app.schemas.advisory import AdvisoryListRead, CropAdvisory, MyAdvisoriesRead
from app.services.advisory_catalog import AdvisoryCatalog, get_advisory_catalog
from app.services.advisory_service import AdvisoryService

router = APIRouter(prefix="/advisories", tags=["advisories"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="advisory failure")


@router.get("", response_model=AdvisoryListRead)
async def list_advisories(
	catalog: AdvisoryCatalog = Depends(get_advisory_catalog),
	_user: User = Depends(get_current_user),
) -> AdvisoryListRead:
	service = AdvisoryService(catalog)
	try:
		return service.get_all_advisories()
	except Exception as exc:
		raise _map_error(exc) from exc


# Declared before "/{crop}" so "my-crops" is not captured as a crop id.
@router.get("/my-crops", response_model=MyAdvisoriesRead)
async def list_my_advisories(
	catalog: AdvisoryCatalog = Depends(get_advisory_catalog),
	current_user: User = Depends(get_current_user),
) -> MyAdvisoriesRead:
	service = AdvisoryService(catalog)
	try:
		return service.get_advisories_for_user(current_user)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/{crop}", response_model=CropAdvisory)
async def get_advisory(
	crop: str,
	catalog: AdvisoryCatalog = Depends(get_advisory_catalog),
	_user: User = Depends(get_current_user),
) -> CropAdvisory:
	service = AdvisoryService(catalog)
	try:
		return service.get_advisory(crop)
	except Exception as exc:
		raise _map_error(exc) from exc
