"""Run the API with uvicorn: ``python -m strix``."""

import uvicorn

from strix.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("strix.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
