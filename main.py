import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Routers
from routers.health import router as health_router
from routers.presets import router as presets_router
from routers.worksheets import router as worksheets_router

logger = logging.getLogger("sumrise-worksheets")
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Sumrise Maths – Worksheet API")

# Allow calls from the Next.js dev server and production site
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://sumrise-maths.vercel.app",
    ],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(worksheets_router)  # /equations, /worksheet
app.include_router(presets_router)  # /presets/...
app.include_router(health_router)  # /health/...
