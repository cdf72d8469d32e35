"""Run the Member API with uvicorn: `python -m member_api`."""

import uvicorn

from member_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "member_api.main:app", host=settings.host, port=settings.port,
    )


if __name__ == "__main__":
    main()
