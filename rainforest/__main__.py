import uvicorn

from .config import Settings


def main():
    settings = Settings.from_env()
    uvicorn.run(
        "rainforest.main:build_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
