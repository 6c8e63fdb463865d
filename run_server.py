"""
Production server launcher from the repository root.

Loads environment variables, starts the in-process notification scheduler when
it is enabled and serves the application via Waitress.
"""
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

from waitress import serve  # noqa: E402
from config.wsgi import application  # noqa: E402
from features.notifications.scheduler import build_scheduler  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    logger.info("=" * 70)
    logger.info("Starting Personal Finance API with Waitress (Production Server)")
    logger.info("=" * 70)
    port_env = (
        os.getenv("PORT")
        or os.getenv("APP_PORT")
        or os.getenv("DEFAULT_PORT")
        or "8080"
    )
    try:
        port = int(port_env)
    except ValueError:
        logger.warning(
            "Invalid port value '%s' from environment. Falling back to 8080.", port_env
        )
        port = 8080
    logger.info("Server: http://0.0.0.0:%s", port)
    logger.info("API Docs: http://0.0.0.0:%s/api/docs/", port)
    logger.info("=" * 70)

    scheduler = build_scheduler()
    if scheduler is not None:
        scheduler.start()

    try:
        serve(
            application,
            host="0.0.0.0",
            port=port,
            threads=8,
            _quiet=False,
            _start=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as exc:  # pragma: no cover - logging unexpected errors
        logger.error("Server error: %s", exc, exc_info=True)
        sys.exit(1)
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)


if __name__ == "__main__":
    main()
