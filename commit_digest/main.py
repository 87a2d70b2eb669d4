import logging

from fastapi import FastAPI

from commit_digest.core.config import get_settings
from commit_digest.routers import commits


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="GitLab Commit Digest", version="0.1.0")
    app.state.settings = settings
    app.include_router(commits.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app

app = create_app()
