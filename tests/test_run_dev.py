"""
개발 서버 스크립트 테스트 (uvicorn 실행 인자)
"""
import importlib.util
from pathlib import Path

import dotenv
import pytest
import uvicorn

from app.core import config

from tests.conftest import make_settings


SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "run_dev.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("run_dev_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.parametrize("debug,log_level", [(True, "debug"), (False, "info")])
def test_uvicorn_uses_settings(tmp_path, monkeypatch, debug, log_level):
    settings = make_settings(tmp_path, API_HOST="127.0.0.1", API_PORT=9123, DEBUG=debug)
    captured = {}

    def fake_run(app, **kwargs):
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr(config, "get_settings", lambda: settings)
    monkeypatch.setattr(dotenv, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setattr(uvicorn, "run", fake_run)

    _load_script().run_uvicorn()

    assert captured == {
        "app": "app.main:app",
        "host": "127.0.0.1",
        "port": 9123,
        "reload": debug,
        "log_level": log_level,
    }
