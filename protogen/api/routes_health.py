from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/api-docs")
