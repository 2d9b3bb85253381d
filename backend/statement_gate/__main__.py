"""python -m statement_gate — serve the API with uvicorn on APP_HOST:APP_PORT."""

import uvicorn

from statement_gate.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "statement_gate.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
