"""Shared pytest fixtures for x86-toolchain tests."""

import os

import pytest

from x86_toolchain.core.logging import setup_logging
from x86_toolchain.testing import FakeToolchain


@pytest.fixture(scope="session", autouse=True)
def _logging():
    setup_logging("WARNING")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("X86_TOOLCHAIN_"):
            monkeypatch.delenv(key)


@pytest.fixture
def asm_source(tmp_path, monkeypatch):
    """An existing hello.asm in the current working directory."""
    monkeypatch.chdir(tmp_path)
    src = tmp_path / "hello.asm"
    src.write_text("section .text\nglobal _start\n_start:\n    mov eax, 1\n    int 0x80\n")
    return src.name


@pytest.fixture
def fake_tools():
    return FakeToolchain()
