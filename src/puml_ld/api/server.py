import uvicorn

from puml_ld.api.app import create_app
from puml_ld.config import ServiceConfig
from puml_ld.utils.logging import setup_logger


def main():
    """Entry point of `puml-ld-server`"""
    config = ServiceConfig.from_env()
    logger = setup_logger("puml_ld", config.log_level, config.log_dir)
    logger.info(f"Starting puml-ld on {config.host}:{config.port}")
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
