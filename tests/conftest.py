from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SDK_SRC = BASE_DIR / "src"
sys.path.insert(0, str(SDK_SRC))

from admin_console_sdk.auth_store import MemoryKeyValueStore  # noqa: E402
from admin_console_sdk.config import ClientConfig  # noqa: E402
from admin_console_sdk.http_client import HttpClient  # noqa: E402
from admin_console_sdk.session_store import SessionStore  # noqa: E402

BASE_URL = "https://api.example.com/api"


def page_envelope(
    items: list[dict],
    *,
    current_page: int = 1,
    total_pages: int = 1,
    total_items: int | None = None,
    page_size: int = 10,
    last_page: bool | None = None,
) -> dict:
    return {
        "statusCodes": 200,
        "response": {
            "data": items,
            "currentPage": current_page,
            "totalPages": total_pages,
            "totalItems": len(items) if total_items is None else total_items,
            "pageSize": page_size,
            "lastPage": current_page == total_pages if last_page is None else last_page,
        },
    }


@pytest.fixture()
def config(tmp_path: Path) -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL, session_dir=str(tmp_path / "session"))


@pytest.fixture()
def http(config: ClientConfig) -> HttpClient:
    return HttpClient(config)


@pytest.fixture()
def kv_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def session_store(kv_store: MemoryKeyValueStore) -> SessionStore:
    return SessionStore(kv_store)
