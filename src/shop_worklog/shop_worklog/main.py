from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, send_from_directory

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_default_users, list_tables
from .entries.controller import register as register_entries
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def register_static(app: Flask, static_dir: Path) -> None:
    """Serve the single-page client; unknown paths fall back to index.html."""

    @app.route("/", defaults={"path": ""}, endpoint="spa")
    @app.route("/<path:path>", endpoint="spa")
    def spa(path: str):
        if path and (static_dir / path).is_file():
            return send_from_directory(static_dir, path)
        return send_from_directory(static_dir, "index.html")


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=logging.DEBUG if getattr(settings, "DEBUG", False) else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__, static_folder=None)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.json.sort_keys = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(db_config=db_config)

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_default_users(container.users_repo)

    register_users(app, container)
    register_entries(app, container)
    register_reports(app, container)
    static_dir = Path(getattr(settings, "STATIC_DIR", "public"))
    if not static_dir.is_absolute():
        static_dir = REPO_ROOT / static_dir
    register_static(app, static_dir)

    return app
