# fintrack/routers/system.py
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["system"])


@router.get("/healthz", response_class=PlainTextResponse)  # liveness probe
def healthz():
    return "ok"
