"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest

from textstub.core import StubParser
from textstub.models import StubSettings

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

LIBSYSTEM_STUB = (
    '--- !tapi-tbd\n'
    'tbd-version:     4\n'
    'targets:         [ x86_64-macos, arm64-macos ]\n'
    "install-name:    '/usr/lib/libSystem.B.dylib'\n"
    'current-version: 1311\n'
    'reexported-libraries:\n'
    '  - targets:         [ x86_64-macos, arm64-macos ]\n'
    "    libraries:       [ '/usr/lib/system/libcache.dylib', '/usr/lib/system/libdyld.dylib' ]\n"
    'exports:\n'
    '  - targets:         [ x86_64-macos, arm64-macos ]\n'
    '    symbols:         [ R8289209$_close, ___crashreporter_info__ ]\n'
    '  - targets:         [ arm64-macos ]\n'
    '    symbols:         [ _arm64_only ]\n'
    '...\n'
    '--- !tapi-tbd\n'
    'tbd-version:     4\n'
    'targets:         [ x86_64-macos, arm64-macos ]\n'
    "install-name:    '/usr/lib/system/libcache.dylib'\n"
    'exports:\n'
    '  - targets:         [ x86_64-macos, arm64-macos ]\n'
    '    symbols:         [ _cache_create, _cache_destroy ]\n'
    '    weak-symbols:    [ _cache_weak ]\n'
    '...\n'
)


@pytest.fixture
def settings() -> StubSettings:
    """Provide settings isolated from the surrounding environment."""
    return StubSettings(targets=('arm64-macos', 'x86_64-macos'))


@pytest.fixture
def parser(settings: StubSettings) -> StubParser:
    """Provide a parser bound to the default targets."""
    return StubParser(settings=settings)


@pytest.fixture
def libsystem_stub() -> str:
    """Provide a two-document stub of an umbrella library."""
    return LIBSYSTEM_STUB


@pytest.fixture
def write_stub(tmp_path: 'Path') -> 'Callable[[str | bytes], Path]':
    """Provide a factory writing stub contents to a temporary file."""
    def write(content: str | bytes, name: str = 'libtest.tbd') -> 'Path':
        """Write a stub file.

        Args:
            content: Stub contents.
            name: File name within the temporary directory.

        Returns:
            Path to the written file.
        """
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
        return path

    return write
