"""CLI entry point for the menu advisor."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .catalog import HOME_MENU_CATALOG, items_in_category
from .config import load_config
from .errors import DocumentProcessingError, MenuAdvisorError
from .models import (
    DOCUMENT_KINDS,
    DOCUMENT_STATUSES,
    FOOD_CATEGORIES,
    MEAL_TYPES,
    STATUS_COMPLETED,
    STATUS_ERROR,
)
from .service import MenuAdvisorService, parse_day


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="kyushoku-advisor",
        description="学校給食メニューアドバイザー: 給食に合わせた朝食・夕食を提案します",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="設定ファイルのパス (TOML)",
    )

    sub = parser.add_subparsers(dest="command")

    # menus
    menus_parser = sub.add_parser("menus", help="登録されている給食メニュー一覧を表示")
    menus_parser.add_argument("--json", action="store_true", help="JSON形式で出力")

    # suggest
    suggest_parser = sub.add_parser("suggest", help="家庭メニューを提案")
    suggest_parser.add_argument("date", type=str, help="日付 (YYYY-MM-DD)")
    suggest_parser.add_argument(
        "--meal",
        "-m",
        type=str,
        default="dinner",
        help="食事タイプ (breakfast / dinner)",
    )
    suggest_parser.add_argument("--json", action="store_true", help="JSON形式で出力")

    # ingest
    ingest_parser = sub.add_parser("ingest", help="給食メニュー文書を読み込む")
    ingest_parser.add_argument("files", type=str, nargs="+", help="文書ファイル")
    ingest_parser.add_argument(
        "--type",
        type=str,
        default=None,
        dest="kind",
        help=f"文書タイプを指定 ({' / '.join(DOCUMENT_KINDS)})",
    )
    ingest_parser.add_argument(
        "--from", type=str, default=None, dest="date_from",
        help="この日付以降の献立のみ登録 (YYYY-MM-DD)",
    )
    ingest_parser.add_argument(
        "--to", type=str, default=None, dest="date_to",
        help="この日付以前の献立のみ登録 (YYYY-MM-DD)",
    )
    ingest_parser.add_argument("--json", action="store_true", help="JSON形式で出力")

    # documents
    documents_parser = sub.add_parser("documents", help="処理した文書の履歴を表示")
    documents_parser.add_argument(
        "--status",
        type=str,
        default=None,
        choices=DOCUMENT_STATUSES,
        help=f"状態で絞り込み ({' / '.join(DOCUMENT_STATUSES)})",
    )
    documents_parser.add_argument("--limit", type=int, default=20, help="表示件数")
    documents_parser.add_argument("--json", action="store_true", help="JSON形式で出力")

    # catalog
    catalog_parser = sub.add_parser("catalog", help="家庭メニューの料理カタログを表示")
    catalog_parser.add_argument(
        "--category",
        type=str,
        default=None,
        help=f"カテゴリ ({' / '.join(FOOD_CATEGORIES)})",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, config.logging.level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "catalog":
        _cmd_catalog(args)
        return

    try:
        service = MenuAdvisorService.from_config(config)
    except MenuAdvisorError as e:
        print(f"給食データの読み込みエラー: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        match args.command:
            case "menus":
                _cmd_menus(service, args)
            case "suggest":
                _cmd_suggest(service, args)
            case "ingest":
                _cmd_ingest(service, args)
            case "documents":
                _cmd_documents(service, args)
    finally:
        service.close()


def _cmd_menus(service: MenuAdvisorService, args) -> None:
    menus = service.list_menus()
    if args.json:
        print(json.dumps([m.to_dict() for m in menus], ensure_ascii=False, indent=2))
        return
    if not menus:
        print("給食メニューが登録されていません。")
        return
    print(f"🍱 給食メニュー ({len(menus)} 日分)")
    for menu in menus:
        print()
        print(menu.display())


def _cmd_suggest(service: MenuAdvisorService, args) -> None:
    meal_types = [m for m, _ in MEAL_TYPES]
    if args.meal not in meal_types:
        print(
            f"注意: 食事タイプ {args.meal!r} には提案ルールがありません "
            f"({' / '.join(meal_types)})",
            file=sys.stderr,
        )
    try:
        suggestion = service.suggest(args.date, args.meal)
    except (ValueError, MenuAdvisorError) as e:
        print(f"提案エラー: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(suggestion.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(suggestion.display())


def _cmd_ingest(service: MenuAdvisorService, args) -> None:
    try:
        date_from = parse_day(args.date_from) if args.date_from else None
        date_to = parse_day(args.date_to) if args.date_to else None
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    results: list[dict] = []
    failed = 0
    for path_str in args.files:
        path = Path(path_str)
        try:
            with open(path, "rb") as f:
                doc = service.process_document(
                    f, path.name, args.kind, date_from=date_from, date_to=date_to
                )
        except OSError as e:
            failed += 1
            results.append({"file": str(path), "error": str(e)})
            if not args.json:
                print(f"❌ {path}: ファイルを開けません: {e}", file=sys.stderr)
            continue
        except DocumentProcessingError as e:
            failed += 1
            results.append(e.document.to_dict())
            if not args.json:
                print(f"❌ {path}: {e}", file=sys.stderr)
            continue

        results.append(doc.to_dict())
        if not args.json:
            print(f"✅ {path}: {doc.menus_imported} 件の献立を登録しました (文書ID: {doc.id})")

    if args.json:
        print(json.dumps(results, ensure_ascii=False, indent=2))
    if failed:
        sys.exit(1)


def _cmd_documents(service: MenuAdvisorService, args) -> None:
    if service.document_log is None:
        print(
            "文書履歴はデータベース有効時のみ記録されます "
            "([database] enabled = true または KYUSHOKU_DB_PATH を設定してください)",
            file=sys.stderr,
        )
        sys.exit(1)

    docs = service.list_documents(status=args.status, limit=args.limit)
    if args.json:
        print(json.dumps([d.to_dict() for d in docs], ensure_ascii=False, indent=2))
        return
    if not docs:
        print("処理済みの文書はありません。")
        return

    icons = {STATUS_COMPLETED: "✅", STATUS_ERROR: "❌"}
    for doc in docs:
        icon = icons.get(doc.status, "⏳")
        print(
            f"{icon} {doc.id}  {doc.original_name} [{doc.type or '-'}] "
            f"{doc.status} ({doc.menus_imported} 件)"
        )
        if doc.error_message:
            print(f"    {doc.error_message}")


def _cmd_catalog(args) -> None:
    if args.category:
        try:
            categories = {args.category: items_in_category(args.category)}
        except ValueError as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)
    else:
        categories = HOME_MENU_CATALOG

    for category, items in categories.items():
        print(f"【{category}】")
        for item in items:
            tags = []
            if not item.japanese:
                tags.append("洋")
            if item.season:
                tags.append("旬: " + "・".join(item.season))
            suffix = f"  ({', '.join(tags)})" if tags else ""
            print(f"  {item.name}{suffix}")
