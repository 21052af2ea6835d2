#!/usr/bin/env python3
"""
Mostrar o conteudo do arquivo de dados (resumo ou JSON bruto).

Uso:
  python scripts/show_store.py [--data-file caminho/data.json] [--json]
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from todo_api.core.config import get_settings
from todo_api.repositories import json_storage


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Mostrar tarefas e usuarios persistidos")
    ap.add_argument("--data-file", help="Arquivo JSON (default: STORE_DATA_FILE ou data.json)")
    ap.add_argument("--json", action="store_true", help="Imprime o JSON normalizado")
    args = ap.parse_args(argv)

    data_file = Path(args.data_file) if args.data_file else get_settings().data_file
    # aqui o erro de leitura interessa ao operador: nao cai para store vazio
    store = json_storage.load(data_file)

    if args.json:
        print(json.dumps(json_storage.dump_store(store), ensure_ascii=False, indent=2))
        return

    print(f"Arquivo: {data_file}")
    print(f"Tarefas ({len(store.tasks)}):")
    for task in sorted(store.tasks.list(), key=lambda t: t.id):
        mark = "x" if task.completed else " "
        print(f"  [{mark}] {task.id}: {task.name}")
    print(f"Usuarios ({len(store.users)}):")
    for user in sorted(store.users.list(), key=lambda u: u.id):
        print(f"  {user.id}: {user.username}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
