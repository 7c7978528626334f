"""Tests for root service discovery."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from slsimport.domain.errors import ResolutionError
from slsimport.infrastructure.service import find_service_file, load_service


class TestFindServiceFile:
    def test_prefers_yml(self, project: Path, write_file) -> None:
        expected = write_file("serverless.yml", "service: a\n")
        write_file("serverless.yaml", "service: b\n")
        assert find_service_file(project) == expected

    def test_python_service(self, project: Path, write_file) -> None:
        expected = write_file("serverless.py", "def configure(inputs):\n    return {}\n")
        assert find_service_file(project) == expected

    def test_missing(self, project: Path) -> None:
        with pytest.raises(ResolutionError) as exc_info:
            find_service_file(project)
        assert len(exc_info.value.attempted) == 3


class TestLoadService:
    def test_loads_document(self, project: Path, write_file) -> None:
        write_file("serverless.yaml", "service: demo\nplugins: [one]\n")
        path, document = asyncio.run(load_service(project))
        assert path == project / "serverless.yaml"
        assert document == {"service": "demo", "plugins": ["one"]}
