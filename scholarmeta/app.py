from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Any

from flask import Flask, g

from .catalog import Catalog
from .errors import register_error_handlers
from .hooks import HookRegistry
from .host import EXTENSION_KEY, HostState, build_url
from .plugin import GoogleScholarPlugin
from .routes import api as api_routes
from .routes import landing as landing_routes


def _repo_root() -> Path:
    # scholarmeta/app.py -> scholarmeta/ -> repo root
    return Path(__file__).resolve().parents[1]


def _load_catalog(cfg: dict[str, Any], data_dir: Path, page_size: int) -> Catalog:
    # An inline catalog (dict) wins over the file on disk.
    inline = cfg.get("CATALOG")
    if inline is not None:
        return Catalog.from_dict(inline, citation_page_size=page_size)
    path = Path(cfg.get("CATALOG_PATH") or (data_dir / "catalog.json"))
    return Catalog.from_path(path, citation_page_size=page_size)


def create_app(config: dict[str, Any] | None = None) -> Flask:
    cfg = config or {}

    root = _repo_root()
    data_dir = Path(cfg.get("DATA_DIR") or (root / "data")).resolve()
    page_size = int(cfg.get("CITATION_PAGE_SIZE") or 50)
    enabled = bool(cfg.get("GOOGLE_SCHOLAR_ENABLED", True))

    logging.getLogger("scholarmeta").setLevel(str(cfg.get("LOG_LEVEL") or "INFO"))

    catalog = _load_catalog(cfg, data_dir, page_size)

    hooks = HookRegistry()
    plugin = GoogleScholarPlugin(
        hooks,
        url_builder=build_url,
        pub_id_types=catalog.pub_id_types,
        citations=catalog.citations,
        files=catalog.files,
        enabled=enabled,
    )
    plugin.register("generic", "plugins/generic/googleScholar")

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=cfg.get("SECRET_KEY") or "scholarmeta-dev",
        DEBUG=bool(cfg.get("DEBUG")),
        DATA_DIR=data_dir,
        CITATION_PAGE_SIZE=page_size,
        GOOGLE_SCHOLAR_ENABLED=enabled,
    )
    app.extensions[EXTENSION_KEY] = HostState(catalog=catalog, hooks=hooks, plugin=plugin)

    @app.before_request
    def _assign_request_id():
        g.request_id = uuid.uuid4().hex[:12]

    register_error_handlers(app)
    landing_routes.register(app)
    api_routes.register(app)

    return app
