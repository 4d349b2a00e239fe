#!/usr/bin/env python3
import sys

from even_service.config import load_settings
from even_service.errors import BindError
from even_service.log import setup_logging
from even_service.server import serve


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level, json=settings.log_json)
    try:
        serve(settings.port, host=settings.host)
    except BindError:
        sys.exit(1)


if __name__ == "__main__":
    main()
