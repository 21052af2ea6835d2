#!/usr/bin/env python3
"""
Sobe a API com uvicorn usando a factory ``todo_api.app:create_app``.

Uso:
  python scripts/serve.py [--host 127.0.0.1] [--port 8000] [--reload]
"""
from __future__ import annotations

import argparse

import uvicorn

from todo_api.core.config import get_settings


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Servir a API de tarefas/usuarios")
    ap.add_argument("--host", default=settings.host, help=f"Endereco de bind (default: {settings.host})")
    ap.add_argument("--port", type=int, default=settings.port, help=f"Porta (default: {settings.port})")
    ap.add_argument("--reload", action="store_true", help="Recarrega ao alterar o codigo (dev)")
    args = ap.parse_args(argv)

    uvicorn.run(
        "todo_api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
