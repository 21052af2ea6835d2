#!/usr/bin/env python3
"""
Gravar (upsert) uma tarefa ou usuario diretamente no arquivo JSON.

Uso:
  python scripts/add_record.py task --id 1 --name "buy milk" [--completed]
  python scripts/add_record.py user --id 7 --username alice --password segredo
  [--data-file caminho/data.json]

Nao rode com o servidor no ar: ele sobrescreve o arquivo a cada mutacao.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from todo_api.core.config import get_settings
from todo_api.domain.records import Task, User
from todo_api.services.store_service import StoreService


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Gravar tarefa/usuario no arquivo de dados")
    ap.add_argument("--data-file", help="Arquivo JSON (default: STORE_DATA_FILE ou data.json)")
    sub = ap.add_subparsers(dest="kind", required=True)

    task = sub.add_parser("task", help="Gravar uma tarefa")
    task.add_argument("--id", type=int, required=True)
    task.add_argument("--name", required=True)
    task.add_argument("--completed", action="store_true")

    user = sub.add_parser("user", help="Gravar um usuario")
    user.add_argument("--id", type=int, required=True)
    user.add_argument("--username", required=True)
    user.add_argument("--password", required=True, help="Armazenada em texto puro")
    return ap


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    data_file = Path(args.data_file) if args.data_file else settings.data_file

    try:
        if args.kind == "task":
            record = Task(id=args.id, name=args.name, completed=args.completed)
        else:
            record = User(id=args.id, username=args.username, password=args.password)
    except ValidationError as exc:
        raise SystemExit(f"Registro invalido: {exc}")

    svc = StoreService.from_file(data_file, atomic_writes=settings.atomic_writes)
    if args.kind == "task":
        svc.add_task(record)
    else:
        svc.add_user(record)

    print(f"OK: {args.kind} gravado")
    print(f"  ID: {record.id}")
    print(f"  Arquivo: {data_file}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
