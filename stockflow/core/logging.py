import json
import logging
from datetime import datetime, timezone

from stockflow.config import get_settings

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


class JsonFormatter(logging.Formatter):
    def __init__(self, app_name: str = "", environment: str = ""):
        super().__init__()
        self.app_name = app_name
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "app": self.app_name,
            "environment": self.environment,
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "location": "{}:{}".format(record.module, record.lineno),
            "message": record.getMessage(),
        }
        # Tenant tag for per-company log filtering, passed via extra=.
        company_id = getattr(record, "company_id", None)
        if company_id is not None:
            payload["company_id"] = company_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def setup_logging() -> None:
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if settings.LOG_JSON:
        handler.setFormatter(JsonFormatter(settings.APP_NAME, settings.ENVIRONMENT))
    else:
        handler.setFormatter(logging.Formatter(fmt=_PLAIN_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # SQL echo only when explicitly debugging.
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level <= logging.DEBUG else logging.WARNING
    )
