"""
API routes for postcode to funding authority lookup
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..models.learner import normalize_postcode
from ..services.postcode_service import PostcodeResolver, get_postcode_resolver

router = APIRouter(prefix="/postcodes", tags=["postcodes"])


@router.get("/{postcode}")
async def lookup_postcode(
    postcode: str,
    resolver: PostcodeResolver = Depends(get_postcode_resolver)
) -> Dict[str, Any]:
    """
    Resolve the funding authority for a postcode (authority is null when unknown)
    """
    return {
        "postcode": postcode,
        "normalized": normalize_postcode(postcode),
        "authority": resolver.resolve_authority(postcode)
    }
