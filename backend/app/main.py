from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging import init_logging
from app.routers.health import router as health_router
from app.routers.trips import router as trips_router

init_logging()

app = FastAPI(title="Trip Planner API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.cors_origin],
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)
app.include_router(health_router, prefix="/api", tags=["health"])
app.include_router(trips_router, prefix="/api", tags=["trips"])


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
