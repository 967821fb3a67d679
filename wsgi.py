"""WSGI entry point for the rent vs buy planner application."""

import os
import sys

from rent_vs_buy import create_app
from rent_vs_buy.config import get_global_settings

app = create_app()

if __name__ == "__main__":
    port = int(os.environ.get("PORT", "5000"))

    # Allow --port on the command line to override PORT
    if len(sys.argv) > 2 and sys.argv[1] == "--port":
        port = int(sys.argv[2])

    debug = get_global_settings().app_env == "development"
    app.run(debug=debug, host="0.0.0.0", port=port)
