from datetime import datetime
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from app.core.di.service_locator import ServiceLocator
from app.core.utils.logger import get_logger
from app.domain.entities.caption_entity import CaptionRecord
from app.domain.exceptions import CaptionGatewayError
from app.presentation.api.dependencies import STATUS_BY_ERROR_KIND, get_locator


router = APIRouter(prefix="/api/v1/caption", tags=["caption"])
logger = get_logger("caption_router")

WHATSAPP_SHARE_URL = "https://wa.me/?text="


class GenerateCaptionRequest(BaseModel):
    image: str = Field(..., description="Image as a data URI (data:image/...;base64,...)")
    prompt: Optional[str] = Field(None, description="Instruction sent with the image; a default is used when empty")


class ParseCaptionRequest(BaseModel):
    text: str = Field("", description="Raw caption text as returned by the provider")


class CaptionOptionResponse(BaseModel):
    text: str
    share_url: str


class CaptionRecordResponse(BaseModel):
    id: str
    raw: str
    strategy: str
    timestamp: datetime
    options: List[CaptionOptionResponse]


class ParseCaptionResponse(BaseModel):
    options: List[str]
    strategy: str


def share_url(text: str) -> str:
    return WHATSAPP_SHARE_URL + quote(text, safe="")


def _to_response(record: CaptionRecord) -> CaptionRecordResponse:
    return CaptionRecordResponse(
        id=record.id,
        raw=record.raw,
        strategy=record.strategy,
        timestamp=record.timestamp,
        options=[CaptionOptionResponse(text=o, share_url=share_url(o)) for o in record.options],
    )


@router.post("/generate", response_model=CaptionRecordResponse)
def generate_caption(body: GenerateCaptionRequest, locator: ServiceLocator = Depends(get_locator)):
    try:
        record = locator.generate_caption_usecase().execute(image_data_uri=body.image, prompt=body.prompt)
    except CaptionGatewayError as e:
        raise HTTPException(status_code=STATUS_BY_ERROR_KIND[e.kind], detail=e.message)
    except Exception as e:
        logger.exception("Error generating caption: %s", e)
        raise HTTPException(status_code=500, detail="Failed to generate caption")
    return _to_response(record)


@router.post("/parse", response_model=ParseCaptionResponse)
def parse_caption(body: ParseCaptionRequest, locator: ServiceLocator = Depends(get_locator)):
    parsed = locator.parse_caption_usecase().execute(body.text)
    return ParseCaptionResponse(options=parsed.options, strategy=parsed.strategy)


@router.get("/history", response_model=List[CaptionRecordResponse])
def list_history(locator: ServiceLocator = Depends(get_locator)):
    return [_to_response(r) for r in locator.caption_history_usecase().list()]


@router.delete("/history", status_code=204)
def clear_history(locator: ServiceLocator = Depends(get_locator)):
    locator.caption_history_usecase().clear()
    return Response(status_code=204)
