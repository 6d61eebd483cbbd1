"""Run the randoping server: python -m randoping"""

import uvicorn

from randoping.adapters.web.server import create_app
from randoping.config import AppConfig


def main():
    config = AppConfig.from_env()
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level="info")


if __name__ == "__main__":
    main()
