import uvicorn

from jobnexus.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "jobnexus.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
