"""Base Pydantic models for parsed stubs and runtime settings.

This module defines the symbol-table record produced by the parser and
the settings model resolving parser configuration from the environment.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

#: Targets supported by default.
DEFAULT_TARGETS = (
    'arm64-macos',
    'x86_64-macos',
)


class SchemaModel(BaseModel):
    """Base immutable model for parsed elements.

    Unknown fields are rejected so that a record can not silently carry
    data the linker does not expect.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
    )


class TextDylib(SchemaModel):
    """Symbol table of a single text-based dynamic library stub.

    Before squashing, `reexported_libs` lists every library the document
    declares as re-exported. After squashing, it lists only libraries
    which were not found in the same file and must be resolved by the
    linker on its own search path.
    """

    install_name: str = Field(
        default='',
        title='Install name',
        description='Identifier of the library, e.g. `/usr/lib/libSystem.B.dylib`.',
    )

    exports: list[str] = Field(
        default_factory=list,
        title='Exported symbols',
        description='Exported symbol names in first-seen order.',
    )

    weak_exports: list[str] = Field(
        default_factory=list,
        title='Weak exported symbols',
        description='Weak-linked exported symbol names in first-seen order.',
    )

    reexported_libs: list[str] = Field(
        default_factory=list,
        title='Re-exported libraries',
        description='Install names of re-exported libraries.',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Resolved settings can not be modified after creation, and unknown
    variables of the surrounding environment are ignored.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )


class StubSettings(SettingsModel):
    """Parser settings resolved from `TEXTSTUB_*` environment variables.

    `TEXTSTUB_TARGETS` takes a JSON list, e.g. `["arm64-macos"]`.
    """

    model_config = SettingsConfigDict(
        env_prefix='TEXTSTUB_',
        frozen=True,
        extra='ignore',
    )

    targets: tuple[str, ...] = Field(
        default=DEFAULT_TARGETS,
        title='Supported targets',
        description='Architecture-OS triples a parser accepts.',
    )

    encoding: str = Field(
        default='utf-8',
        title='Input encoding',
        description='Encoding used to decode stubs given as bytes.',
    )
