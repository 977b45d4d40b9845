from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from learntree.core.config import settings
from learntree.core.logging import setup_logging
from learntree.apis.workspaces.main import router as workspaces_router
from learntree.apis.tree.main import router as tree_router
from learntree.apis.cards.main import router as cards_router
from learntree.apis.transfer.main import router as transfer_router


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title=settings.app.name, version=settings.app.version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(workspaces_router)
    app.include_router(tree_router)
    app.include_router(cards_router)
    app.include_router(transfer_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        print(f"An error occurred when starting the server: {e}.")
