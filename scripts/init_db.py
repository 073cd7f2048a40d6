"""Initialize the users database."""

from user_api.config import load_config
from user_api.logging import configure_logging


def main() -> None:
    configure_logging()
    config = load_config()
    config.engine.dispose()
    print("Database initialized.")


if __name__ == "__main__":
    main()
