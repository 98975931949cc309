import logging
import os

from fastapi import FastAPI

from app.routers.gallery import router as gallery_router
from app.routers.images import router as images_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


app = FastAPI(title="Image Gallery")

# Routers
app.include_router(images_router, prefix="/api")
app.include_router(gallery_router)


# --- Health ---
@app.get("/health")
def health():
    return {"status": "ok"}


# --- Entry point (local dev) ---
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
