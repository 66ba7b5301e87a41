import uvicorn

from fileshare.config import settings


def run_server():
    uvicorn.run(
        "fileshare.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=False
    )


if __name__ == "__main__":
    run_server()
