# app/main.py
from fastapi import FastAPI

from app.api.routes import router as api_router
from app.config import settings
from app.logging_config import setup_logging

setup_logging()

app = FastAPI(title=settings.app_title)

# /discovery と /tools/{name} をルート直下に生やす
app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=False)
