"""
Cragcast — FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cragcast.api.router import router
from cragcast.config import CORS_ORIGINS

app = FastAPI(
    title="Cragcast API",
    description="Climbing conditions engine: rock friction from weather forecasts",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "cragcast"}
