from typing import List

from fastapi import APIRouter, Depends

from dresswell.routers.deps import get_vision_provider, prepared_image
from dresswell.schemas.analysis import AnalysisIn
from dresswell.services.analysis import analyze_comprehensive
from dresswell.services.description import describe_clothing, suggest_styling
from dresswell.services.detection import detect_clothing
from dresswell.services.vision.providers.base import VisionProvider
from dresswell.services.vision.types import (
    ClothingDescription,
    ClothingDetectionResult,
    ComprehensiveAnalysis,
    StylingSuggestion,
)

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.post("", response_model=ComprehensiveAnalysis)
async def analyze_image(payload: AnalysisIn, provider: VisionProvider = Depends(get_vision_provider)):
    image_b64 = prepared_image(payload.image_b64)
    return await analyze_comprehensive(provider, image_b64)


@router.post("/detect", response_model=ClothingDetectionResult)
async def detect_image(payload: AnalysisIn, provider: VisionProvider = Depends(get_vision_provider)):
    image_b64 = prepared_image(payload.image_b64)
    return await detect_clothing(provider, image_b64)


@router.post("/describe", response_model=ClothingDescription)
async def describe_image(payload: AnalysisIn, provider: VisionProvider = Depends(get_vision_provider)):
    image_b64 = prepared_image(payload.image_b64)
    return await describe_clothing(provider, image_b64)


@router.post("/suggestions", response_model=List[StylingSuggestion])
async def suggest_for_image(payload: AnalysisIn, provider: VisionProvider = Depends(get_vision_provider)):
    image_b64 = prepared_image(payload.image_b64)
    return await suggest_styling(provider, image_b64)
