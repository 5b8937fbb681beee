"""Tests for the kyushoku-advisor command line."""

import json

import pytest

from kyushoku.advisor.cli import main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for name in ("KYUSHOKU_SEED_PATH", "KYUSHOKU_DB_PATH", "KYUSHOKU_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "kyushoku-advisor" in capsys.readouterr().out


def test_menus_json(capsys):
    main(["menus", "--json"])
    menus = json.loads(capsys.readouterr().out)
    assert len(menus) == 5
    assert menus[0]["main_dish"] == "鶏肉の照り焼き"


def test_menus_text(capsys):
    main(["menus"])
    out = capsys.readouterr().out
    assert "5 日分" in out
    assert "カレーライス" in out


def test_menus_empty_seed(capsys, tmp_path, monkeypatch):
    monkeypatch.setenv("KYUSHOKU_SEED_PATH", str(tmp_path / "none.json"))
    main(["menus"])
    assert "登録されていません" in capsys.readouterr().out


def test_suggest_json(capsys):
    main(["suggest", "2025-01-13", "--meal", "dinner", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["main_dish"] == "魚の煮付け"
    assert data["soup"] == "すまし汁"
    assert data["school_lunch_ref"] == "鶏肉の照り焼き"


def test_suggest_default_meal_is_dinner(capsys):
    main(["suggest", "2025-01-15", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["meal_type"] == "dinner"
    assert data["main_dish"] == "鶏の唐揚げ"


def test_suggest_text(capsys):
    main(["suggest", "2025-01-15", "-m", "breakfast"])
    assert "納豆" in capsys.readouterr().out


def test_suggest_not_found_exits(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["suggest", "2025-01-20"])
    assert exc_info.value.code == 1
    assert "2025-01-20" in capsys.readouterr().err


def test_suggest_bad_date_exits(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["suggest", "2025/01/13"])
    assert exc_info.value.code == 1
    assert "日付の形式" in capsys.readouterr().err


def test_suggest_unknown_meal_warns(capsys):
    main(["suggest", "2025-01-13", "--meal", "lunch", "--json"])
    captured = capsys.readouterr()
    assert "lunch" in captured.err
    assert json.loads(captured.out)["main_dish"] == ""


def test_ingest_json_file(capsys, tmp_path, monkeypatch):
    monkeypatch.setenv("KYUSHOKU_DB_PATH", str(tmp_path / "menus.db"))
    menu_file = tmp_path / "week4.json"
    menu_file.write_text(
        json.dumps(
            [{"date": "2025-01-20T00:00:00Z", "main_dish": "ハンバーグ"}],
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )

    main(["ingest", str(menu_file), "--json"])
    results = json.loads(capsys.readouterr().out)
    assert results[0]["status"] == "completed"
    assert results[0]["menus_imported"] == 1

    main(["suggest", "2025-01-20", "--json"])
    assert json.loads(capsys.readouterr().out)["main_dish"] == "牛肉炒め"


def test_ingest_pdf_fails(capsys, tmp_path):
    pdf = tmp_path / "menu.pdf"
    pdf.write_bytes(b"%PDF-1.4")
    with pytest.raises(SystemExit) as exc_info:
        main(["ingest", str(pdf)])
    assert exc_info.value.code == 1
    assert "データの抽出に失敗しました" in capsys.readouterr().err


def test_ingest_missing_file(capsys, tmp_path):
    with pytest.raises(SystemExit):
        main(["ingest", str(tmp_path / "missing.json")])
    assert "ファイルを開けません" in capsys.readouterr().err


def test_ingest_bad_window(capsys, tmp_path):
    with pytest.raises(SystemExit):
        main(["ingest", str(tmp_path / "x.json"), "--from", "soon"])


def test_catalog(capsys):
    main(["catalog"])
    out = capsys.readouterr().out
    assert "【protein】" in out
    assert "焼き鮭" in out


def test_catalog_category(capsys):
    main(["catalog", "--category", "fruits"])
    out = capsys.readouterr().out
    assert "【fruits】" in out
    assert "【protein】" not in out


def test_catalog_unknown_category(capsys):
    with pytest.raises(SystemExit):
        main(["catalog", "--category", "sweets"])
    assert "不明なカテゴリ" in capsys.readouterr().err


def test_bad_seed_file_exits(capsys, tmp_path, monkeypatch):
    seed = tmp_path / "seed.json"
    seed.write_text("{broken", encoding="utf-8")
    monkeypatch.setenv("KYUSHOKU_SEED_PATH", str(seed))
    with pytest.raises(SystemExit) as exc_info:
        main(["menus"])
    assert exc_info.value.code == 1
    assert "給食データの読み込みエラー" in capsys.readouterr().err


def _ingest_good_and_bad(tmp_path):
    good = tmp_path / "week4.json"
    good.write_text('[{"date": "2025-01-20T00:00:00Z", "main_dish": "ハンバーグ"}]', encoding="utf-8")
    bad = tmp_path / "scan.pdf"
    bad.write_bytes(b"%PDF-1.4")
    main(["ingest", str(good)])
    with pytest.raises(SystemExit):
        main(["ingest", str(bad)])


def test_documents_lists_audit_trail(capsys, tmp_path, monkeypatch):
    monkeypatch.setenv("KYUSHOKU_DB_PATH", str(tmp_path / "menus.db"))
    _ingest_good_and_bad(tmp_path)
    capsys.readouterr()

    main(["documents", "--json"])
    docs = json.loads(capsys.readouterr().out)
    assert [d["original_name"] for d in docs] == ["scan.pdf", "week4.json"]
    assert docs[0]["status"] == "error"
    assert docs[1]["menus_imported"] == 1


def test_documents_filter_by_status(capsys, tmp_path, monkeypatch):
    monkeypatch.setenv("KYUSHOKU_DB_PATH", str(tmp_path / "menus.db"))
    _ingest_good_and_bad(tmp_path)
    capsys.readouterr()

    main(["documents", "--status", "error"])
    out = capsys.readouterr().out
    assert "scan.pdf" in out
    assert "データの抽出に失敗しました" in out
    assert "week4.json" not in out


def test_documents_requires_database(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["documents"])
    assert exc_info.value.code == 1
    assert "KYUSHOKU_DB_PATH" in capsys.readouterr().err
