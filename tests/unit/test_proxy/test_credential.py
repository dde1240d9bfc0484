"""Tests for the credential file store."""

from __future__ import annotations

from pathlib import Path

import pytest

from dashbridge.proxy.credential import CredentialStore, CredentialWriteError


class TestCredentialStore:
    @pytest.mark.asyncio
    async def test_read_missing_file(self, credential_path: Path) -> None:
        assert await CredentialStore(credential_path).read() is None

    @pytest.mark.asyncio
    async def test_write_then_read(self, credential_path: Path) -> None:
        store = CredentialStore(credential_path)
        await store.write("abc123")
        assert credential_path.read_text() == "abc123"
        assert await store.read() == "abc123"

    @pytest.mark.asyncio
    async def test_last_write_wins(self, credential_path: Path) -> None:
        store = CredentialStore(credential_path)
        await store.write("first")
        await store.write("second")
        assert await store.read() == "second"

    @pytest.mark.asyncio
    async def test_write_failure_raises(self, tmp_path: Path) -> None:
        store = CredentialStore(tmp_path / "missing-dir" / ".credential")
        with pytest.raises(CredentialWriteError, match="Could not write"):
            await store.write("abc123")
