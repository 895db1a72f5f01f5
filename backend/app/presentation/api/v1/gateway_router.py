from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.core.di.service_locator import ServiceLocator
from app.core.utils.logger import get_logger
from app.domain.exceptions import CaptionGatewayError
from app.presentation.api.dependencies import STATUS_BY_ERROR_KIND, get_locator


router = APIRouter(prefix="/api", tags=["gateway"])
logger = get_logger("gateway_router")


class CaptionGatewayRequest(BaseModel):
    image: str = Field("", description="Image as a data URI (data:image/...;base64,...)")
    prompt: Optional[str] = Field(None, description="Instruction sent with the image; a default is used when empty")


class CaptionGatewayResponse(BaseModel):
    caption: str


@router.post("/caption", response_model=CaptionGatewayResponse)
def request_caption(body: CaptionGatewayRequest, locator: ServiceLocator = Depends(get_locator)):
    try:
        caption = locator.request_caption_usecase().execute(image_data_uri=body.image, prompt=body.prompt)
        return CaptionGatewayResponse(caption=caption)
    except CaptionGatewayError as e:
        logger.warning("Caption request rejected (%s): %s", e.kind.value, e.message)
        return JSONResponse({"error": e.message}, status_code=STATUS_BY_ERROR_KIND[e.kind])
    except Exception as e:
        logger.exception("Caption API error: %s", e)
        return JSONResponse({"error": "Failed to generate caption"}, status_code=500)
