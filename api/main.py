import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import settings, store
from core.log import configure_logging
from news import generator
from news import routes as news_routes
from news import router as news_router
from news import service as news_service
from users import router as users_router
from users import service as user_service

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # The generator itself is started by the first stream subscriber.
    store.init_stores()
    news_service.seed_articles()
    user_service.seed_users()
    try:
        yield
    finally:
        await generator.shutdown()
        store.close_stores()


app = FastAPI(lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(news_router.router, tags=["news"])
app.include_router(news_routes.router, tags=["news-functional"])
app.include_router(users_router.router, tags=["users"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "reactive news api"}


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host(), port=settings.port(), log_level=settings.log_level().lower())
