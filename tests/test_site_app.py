# tests/test_site_app.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
from datetime import datetime
from unittest.mock import MagicMock

import pymysql
import pytest
from flask import Flask

from db import Database
from site_app.app import create_app
from site_app.main import main


@pytest.fixture
def site_root(tmp_path):
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "home.html").write_text("<h1>home</h1>", encoding="utf-8")
    (pages / "about.html").write_text("<h1>about</h1>", encoding="utf-8")
    return tmp_path


def _make_client(database=None, site_root=None):
    app = create_app(database, site_root=site_root)
    app.testing = True
    return app.test_client()


def test_index_serves_default_page(site_root):
    client = _make_client(site_root=site_root)
    response = client.get("/")
    assert response.status_code == 200
    assert b"<h1>home</h1>" in response.data


def test_index_serves_requested_page(site_root):
    client = _make_client(site_root=site_root)
    response = client.get("/", query_string={"page": "about"})
    assert response.status_code == 200
    assert b"<h1>about</h1>" in response.data


def test_index_missing_page_is_404(site_root):
    client = _make_client(site_root=site_root)
    assert client.get("/", query_string={"page": "nope"}).status_code == 404


def test_api_user(site_root):
    db = MagicMock(spec=Database)
    db.read_one.return_value = {
        "Username": "ann",
        "Email": "ann@example.com",
        "Date_Registration": datetime(2024, 3, 9),
        "Rank_Level": 1,
    }
    client = _make_client(db, site_root)

    response = client.get("/api/users/3")

    assert response.status_code == 200
    assert response.get_json()["username"] == "ann"


def test_api_user_not_found(site_root):
    db = MagicMock(spec=Database)
    db.read_one.return_value = None
    client = _make_client(db, site_root)
    assert client.get("/api/users/3").status_code == 404


def test_main_exits_when_database_unreachable(fake_mysql, monkeypatch):
    import config

    monkeypatch.setattr(config, "MYSQL_DATABASE", "test_site")
    monkeypatch.setattr(config, "MYSQL_USER", "web")
    monkeypatch.setattr(config, "MYSQL_PASSWORD", "secret")
    fake_mysql.connect_error = pymysql.err.OperationalError(2003, "Can't connect to MySQL server")

    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1


def test_main_exits_when_not_configured(monkeypatch):
    import config

    monkeypatch.setattr(config, "MYSQL_DATABASE", None)
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1


def test_main_runs_app_then_disconnects(fake_mysql, monkeypatch):
    import config

    monkeypatch.setattr(config, "MYSQL_DATABASE", "test_site")
    monkeypatch.setattr(config, "MYSQL_USER", "web")
    monkeypatch.setattr(config, "MYSQL_PASSWORD", "secret")
    runs = []

    def fake_run(self, host=None, port=None, debug=None, **options):
        runs.append((host, port, debug, fake_mysql.connections[0].open))

    monkeypatch.setattr(Flask, "run", fake_run)

    main(["--port", "8123"])

    assert runs == [("127.0.0.1", 8123, False, True)]
    assert not fake_mysql.connections[0].open
