"""Entry point: python -m PlanCheck.server [--host HOST] [--port PORT] [--no-log]"""

from .server import main

if __name__ == "__main__":
    main()
