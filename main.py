import logging

import uvicorn
from dotenv import load_dotenv

from infrastructure.config import ConfigurationError, load_config_from_env
from infrastructure.http.api import create_app
from infrastructure.observability.logging_utils import (
    configure_logging,
    log_event,
    register_sensitive_values,
)


load_dotenv()
logger = logging.getLogger(__name__)


def main() -> None:
    try:
        config = load_config_from_env()
    except ConfigurationError as error:
        configure_logging()
        log_event(logger, logging.ERROR, "cli.config.invalid", error=str(error))
        raise SystemExit(1) from error

    configure_logging(log_dir=config.log_dir, production=config.is_production)
    register_sensitive_values(config.github_token, config.github_webhook_secret)
    log_event(
        logger,
        logging.INFO,
        "cli.server.start",
        host=config.host,
        port=config.port,
        environment=config.environment,
        github_api_base_url=config.github_api_base_url,
    )

    app = create_app(config)
    # log_config=None routes uvicorn records through the handlers above; lifespan="on"
    # makes a rejected token stop the server.
    uvicorn.run(app, host=config.host, port=config.port, log_config=None, lifespan="on")


if __name__ == "__main__":
    main()
