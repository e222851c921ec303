"""Web interface routes implementation."""

import os
from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse

router = APIRouter()

STATIC_DIR = os.path.join(os.path.dirname(__file__), "..", "static")


def _static_file(name: str) -> str:
    """Path of a bundled asset; 404 if it is missing."""
    path = os.path.join(STATIC_DIR, name)
    if not os.path.isfile(path):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="404 page not found")
    return path


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage():
    """Serve the homepage."""
    return FileResponse(_static_file("index.html"), media_type="text/html")


@router.get("/style.css", include_in_schema=False)
async def stylesheet():
    """Serve the homepage stylesheet."""
    return FileResponse(_static_file("style.css"), media_type="text/css")


@router.get("/{code}", include_in_schema=False)
async def redirect_to_url(request: Request, code: str):
    """Redirect to the target URL."""
    registry = request.app.state.registry
    
    target = await registry.lookup(code)
    
    if target is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{code}' not found",
        )
    
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
