"""Root conftest: shared test configuration.

Fixtures:
    - settings: AppSettings isolated from .env files and SDL_LOCATOR_* variables
    - metadata_server: fake AWS/GCP metadata services on httpx.MockTransport
    - sdl_location / sdl_file / sdl_accession / sdl_payload: wire payload factories
"""

import os
from typing import Any

import pytest

from core.config import AppSettings
from tests.metadata_fakes import FakeMetadataServer


@pytest.fixture
def settings(monkeypatch):
    for key in list(os.environ):
        if key.startswith("SDL_LOCATOR_"):
            monkeypatch.delenv(key)
    return AppSettings(_env_file=None)


@pytest.fixture
def metadata_server():
    return FakeMetadataServer()


def _location(**overrides: Any) -> dict[str, Any]:
    location = {
        "link": "https://sra-pub.s3.amazonaws.com/SRR000001/a.bam",
        "service": "s3",
        "region": "us-east-1",
        "expirationDate": "2026-10-17T00:00:00Z",
        "bucket": "sra-pub",
        "key": "SRR000001/a.bam",
    }
    location.update(overrides)
    return location


def _file(**overrides: Any) -> dict[str, Any]:
    file = {
        "name": "a.bam",
        "size": 1024,
        "type": "bam",
        "modificationDate": "2018-05-01T12:00:00Z",
        "md5": "d41d8cd98f00b204e9800998ecf8427e",
        "locations": [_location()],
    }
    file.update(overrides)
    return file


def _accession(**overrides: Any) -> dict[str, Any]:
    accession = {
        "bundle": "SRR000001",
        "status": 200,
        "msg": "ok",
        "files": [_file()],
    }
    accession.update(overrides)
    return accession


@pytest.fixture
def sdl_location():
    return _location


@pytest.fixture
def sdl_file():
    return _file


@pytest.fixture
def sdl_accession():
    return _accession


@pytest.fixture
def sdl_payload():
    def build(*accessions: dict[str, Any], version: str = "2") -> dict[str, Any]:
        return {"version": version, "result": list(accessions) or [_accession()]}

    return build
