import pytest

from url_shortener import create_app
from url_shortener.config import Config
from url_shortener.db import Database


@pytest.fixture
def db(tmp_path):
    database = Database(str(tmp_path / "storage.db"))
    database.init_db()
    return database


@pytest.fixture
def app(tmp_path):
    config = Config(env="local", storage_path=str(tmp_path / "app.db"))
    app = create_app(config)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
