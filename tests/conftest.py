"""Shared test fixtures for code-ferret."""

from collections.abc import Callable
import os
from pathlib import Path

import pytest


# Test environment variables
TEST_ENV = {
    "CODE_FERRET_LOG_LEVEL": "warning",
    "CODE_FERRET_LOG_JSON": "false",
}


# Set environment variables immediately when conftest.py is loaded
for key, value in TEST_ENV.items():
    os.environ[key] = value


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Drop stray CODE_FERRET_* overrides and set test defaults."""
    for key in list(os.environ):
        if key.startswith("CODE_FERRET_"):
            monkeypatch.delenv(key, raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[dict[str, str | bytes]], Path]:
    """Write a ``relative path -> content`` mapping below ``tmp_path``."""

    def _write(files: dict[str, str | bytes], root: Path | None = None) -> Path:
        base = root or tmp_path
        for relative, content in files.items():
            path = base / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return base

    return _write


@pytest.fixture
def sample_project(write_tree) -> Path:
    """Small TypeScript project with a service, a helper and a test file."""
    return write_tree(
        {
            "src/EmailService.ts": (
                "import { SmtpClient } from './smtp';\n"
                "\n"
                "// Sends email notifications to users\n"
                "export class EmailService {\n"
                "  constructor(private client: SmtpClient) {}\n"
                "\n"
                "  sendEmail(to: string, body: string) {\n"
                "    return this.client.send(to, body);\n"
                "  }\n"
                "}\n"
            ),
            "src/UserManagement.ts": (
                "export class UserManagement {\n"
                "  createUser(name: string) {\n"
                "    return { name };\n"
                "  }\n"
                "}\n"
            ),
            "src/math.ts": "export function add(a: number, b: number) {\n  return a + b;\n}\n",
            "src/EmailService.test.ts": "describe('EmailService', () => { sendEmail(); });\n",
        }
    )
