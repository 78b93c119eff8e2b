import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from churro.api.app import get_pipeline
from churro.api.core.pipeline import ChatPipeline
from churro.api.services.gateway import GatewayError
from churro.api.services.models import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "API key not configured."
CONNECTION_TROUBLE_MESSAGE = "I'm having trouble connecting. Please try again."

router = APIRouter()


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
def chat(request: ChatRequest, pipeline: Optional[ChatPipeline] = Depends(get_pipeline)):
    """
    Answer one chat turn with a message and, when the model asked for one,
    a resolved view.
    """
    if pipeline is None:
        return JSONResponse(status_code=503, content={"message": NOT_CONFIGURED_MESSAGE})

    try:
        return pipeline.respond(request)
    except GatewayError as e:
        logger.error(f"Model gateway call failed: {e}")
        return JSONResponse(status_code=500, content={"message": CONNECTION_TROUBLE_MESSAGE})
    except Exception as e:
        logger.exception(f"Unexpected error while answering chat: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
