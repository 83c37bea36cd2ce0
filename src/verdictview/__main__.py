"""Run the VerdictView API with uvicorn."""

import uvicorn

from verdictview.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "verdictview.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
