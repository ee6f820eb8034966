import pytest

from helpers.sitemap_utils import SCHEMA
from sitemap_tool import build_parser, main

NS = {"sm": SCHEMA}


def test_writes_files_and_index(tmp_path, parse_xml):
    code = main([
        "--domain", "https://ex.com",
        "--out", str(tmp_path),
        "--per-file", "2",
        "--index-lastmod", "2024-06-01",
        "/a", "/b", "/c",
    ])
    assert code == 0
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "sitemap-1.xml",
        "sitemap-index.xml",
        "sitemap.xml",
    ]
    index = parse_xml((tmp_path / "sitemap-index.xml").read_text(encoding="utf-8"))
    assert [e.text for e in index.findall(".//sm:loc", NS)] == [
        "https://ex.com/sitemap.xml",
        "https://ex.com/sitemap-1.xml",
    ]
    first = parse_xml((tmp_path / "sitemap.xml").read_text(encoding="utf-8"))
    assert [e.text for e in first.findall(".//sm:changefreq", NS)] == ["weekly", "weekly"]


def test_creates_missing_output_directory(tmp_path):
    out = tmp_path / "nested" / "dir"
    assert main(["--out", str(out), "--no-index", "/"]) == 0
    assert [p.name for p in out.iterdir()] == ["sitemap.xml"]


def test_stdout_mode(tmp_path, capsys):
    pages = tmp_path / "pages.csv"
    pages.write_text("loc,priority\n/x,0.1\n/y,0\n", encoding="utf-8")
    code = main(["--stdout", "--domain", "https://ex.com", "--pages", str(pages),
                 "--index-loc", "https://cdn.ex.com/maps"])
    assert code == 0
    out = capsys.readouterr().out
    assert "<loc>https://ex.com/x</loc>" in out
    assert "<priority>0</priority>" in out
    assert "<loc>https://cdn.ex.com/maps/sitemap.xml</loc>" in out
    assert list(tmp_path.iterdir()) == [pages]


def test_missing_pages_file_exits_2(tmp_path):
    assert main(["--out", str(tmp_path), "--pages", str(tmp_path / "nope.csv")]) == 2


def test_bad_lastmod_exits_1(tmp_path):
    pages = tmp_path / "pages.csv"
    pages.write_text("loc,lastmod\n/x,sometime soonish\n", encoding="utf-8")
    assert main(["--out", str(tmp_path / "out"), "--pages", str(pages)]) == 1


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.filename == "sitemap"
    assert args.per_file == 50000
    assert args.index_lastmod == "Today"
    assert args.paths == []


@pytest.mark.parametrize("flag", ["--no-index", "--stdout"])
def test_flags_are_booleans(flag):
    assert getattr(build_parser().parse_args([flag]), flag.lstrip("-").replace("-", "_")) is True


@pytest.mark.parametrize("value", ["0", "-3", "many"])
def test_per_file_must_be_positive(tmp_path, value, capsys):
    with pytest.raises(SystemExit) as info:
        main(["--out", str(tmp_path), "--per-file", value, "/a"])
    assert info.value.code == 2
    assert "--per-file" in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []
