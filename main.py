import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config import CORS_ORIGINS, LOG_LEVEL, UPLOAD_DIR
from database import check_connection
from exception_handlers import setup_exception_handlers
from routers import ALL_ROUTERS
from services.user_service import AVATAR_FOLDER

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# App instance
app = FastAPI(
    title="LandlordPro API",
    description="Property management backend: properties, floors, locals, leases, payments and expenses.",
    version="1.0.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Mount static avatars; payment proofs go through an authenticated route
AVATAR_DIR = os.path.join(UPLOAD_DIR, AVATAR_FOLDER)
os.makedirs(AVATAR_DIR, exist_ok=True)
app.mount(f"/uploads/{AVATAR_FOLDER}", StaticFiles(directory=AVATAR_DIR), name="avatars")

for router in ALL_ROUTERS:
    app.include_router(router)


@app.get("/", tags=["health"])
def health():
    if not check_connection():
        return JSONResponse(
            status_code=503,
            content={"success": False, "message": "Database unavailable", "database": "down"},
        )
    return {"success": True, "message": "LandlordPro backend is healthy", "database": "up"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=False)
