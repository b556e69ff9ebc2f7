"""
Run the clinic server.
Run with: python -m eclinic
"""

import logging
import uvicorn
from eclinic.config import get_settings


def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger(__name__).info("Server running on http://localhost:%d", settings.port)
    uvicorn.run("eclinic.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
