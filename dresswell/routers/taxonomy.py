from fastapi import APIRouter

from dresswell.core.taxonomy import get_taxonomy

router = APIRouter(prefix="/taxonomy", tags=["taxonomy"])


@router.get("")
async def read_taxonomy():
    return get_taxonomy()
