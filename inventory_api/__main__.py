# inventory_api/__main__.py
import uvicorn

from .config import Settings
from .logging_config import setup_logging


def main():
    settings = Settings()
    setup_logging(settings.log_level)
    # log_config=None keeps uvicorn on the handlers installed above
    uvicorn.run("inventory_api.main:app", host=settings.host, port=settings.port,
                log_config=None, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
