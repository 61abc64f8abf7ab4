from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from infrashadows.config import settings
from infrashadows.api.routes import router

app = FastAPI(
    title="InfraShadows Impact Engine",
    description=(
        "Estimate how a proposed development strains shared water, power, "
        "drainage and green cover, check it against zoning limits, and "
        "reduce the findings to a legitimacy score and impact shadows."
    ),
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins + ["http://localhost:8000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Rejected inputs may be Infinity/NaN, which JSONResponse cannot encode
    errors = [
        {key: value for key, value in error.items() if key != "input"}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


@app.get("/")
async def root():
    return {
        "name": "InfraShadows Impact Engine",
        "version": "1.0.0",
        "area": settings.area_name,
        "endpoints": {
            "api_docs": "/docs",
            "health": "/health",
            "analyze": "POST /api/v1/analyze",
            "validate": "POST /api/v1/validate",
            "water_demand": "POST /api/v1/water-demand",
            "power_load": "POST /api/v1/power-load",
            "drainage_impact": "POST /api/v1/drainage-impact",
            "green_cover": "POST /api/v1/green-cover",
        },
    }


@app.get("/health")
async def health():
    """Health check with dependency status."""
    status = {"status": "healthy", "version": "1.0.0"}

    # Check Redis
    try:
        from infrashadows.services.cache import get_redis
        r = await get_redis()
        if r:
            await r.ping()
            status["redis"] = "connected"
        else:
            status["redis"] = "not configured"
    except Exception as e:
        status["redis"] = f"error: {e}"

    return status
