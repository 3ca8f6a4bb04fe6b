from __future__ import annotations

from pathlib import Path

from scholarmeta.app import create_app
from scholarmeta.config import configure_logging, load_config

config = load_config(repo_root=Path(__file__).resolve().parent)
configure_logging(config["LOG_LEVEL"])
app = create_app(config)

if __name__ == "__main__":
    # Local dev server
    app.run(host="127.0.0.1", port=8000, debug=bool(app.config.get("DEBUG")))
