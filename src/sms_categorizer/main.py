import uvicorn

from sms_categorizer.app import app
from sms_categorizer.core import settings
from sms_categorizer.logger import get_logging_config


def run() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=get_logging_config())


if __name__ == "__main__":
    run()
