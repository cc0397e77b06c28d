from __future__ import annotations

from module_resolver.core.cli import app

__all__ = ["app"]

if __name__ == "__main__":
    app()
