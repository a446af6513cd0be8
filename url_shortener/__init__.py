from typing import Optional

from flask import Flask

from . import middleware
from .config import Config, load_config
from .db import Database
from .log import setup_logger
from .routes import DB_EXTENSION, bp


def create_app(config: Optional[Config] = None, db: Optional[Database] = None) -> Flask:
    config = config or load_config()
    setup_logger(config.env)

    app = Flask(__name__)
    app.config["SHORTENER"] = config

    db = db or Database(config.storage_path, timeout=config.timeout)
    db.init_db()
    app.extensions[DB_EXTENSION] = db

    middleware.init_app(app)
    app.register_blueprint(bp)
    return app
