# piloo/routers/ai_chat.py
from fastapi import APIRouter, Depends
from piloo.schemas.report import ChatRequest
from piloo.services.ai_chat import answer
from piloo.storage import Storage, get_storage

router = APIRouter()


@router.post("/ai/chat", summary="Ask the surveillance assistant")
def chat(body: ChatRequest, storage: Storage = Depends(get_storage)):
    return answer(storage, body.query)
