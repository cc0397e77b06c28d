"""
This module defines Pydantic models used to validate resolver options.

Options come from three places (a JSON rc file, a `pyproject.toml` table and
the command line) and are validated into the same `ResolverOptions` shape
before being frozen into a `ResolverConfig`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResolverOptions(BaseModel):
    """
    The user-facing resolver options.

    Attributes:
        root (list[str]): Root directories or glob patterns, in priority order.
        alias (dict[str, str]): Specifier prefix to replacement mapping.
        extensions (list[str] | None): Probe order; the built-in default when None.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    root: list[str] = Field(default_factory=list)
    alias: dict[str, str] = Field(default_factory=dict)
    extensions: list[str] | None = None

    @field_validator("root", mode="before")
    @classmethod
    def _coerce_root(cls, v: str | list[str] | None) -> list[str]:
        """Accepts a single root written as a plain string."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("extensions")
    @classmethod
    def _dot_extensions(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None
        return [ext if not ext or ext.startswith(".") else f".{ext}" for ext in v]

    def merged_with(self, override: ResolverOptions) -> ResolverOptions:
        """
        Layers `override` on top of these options.

        Non-empty roots and extensions in `override` replace ours; alias
        entries are merged key by key with `override` winning.

        Args:
            override (ResolverOptions): The higher-priority options.

        Returns:
            ResolverOptions: A new, merged options object.
        """
        return ResolverOptions(
            root=override.root or self.root,
            alias={**self.alias, **override.alias},
            extensions=override.extensions or self.extensions,
        )
