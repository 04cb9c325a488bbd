import base64
import io
import json

import pytest
from PIL import Image

from emojiopt.converter import SizeTally, format_size
from emojiopt.dataset import read_module
from emojiopt.errors import TranscodeError
from emojiopt.optimize import TqdmReporter, print_summary, run


@pytest.fixture
def paths(tmp_path):
    return {
        "source_path": tmp_path / "data" / "applemojis.js",
        "backup_path": tmp_path / "backup" / "applemojis.backup.js",
        "output_path": tmp_path / "output" / "applemojis.optimized.js",
    }


def write_source(path, records):
    path.parent.mkdir(parents=True)
    path.write_text(f"export default {json.dumps(records)};\n", encoding="utf-8")


def test_end_to_end(paths, make_png, make_png_uri, capsys):
    records = [
        {"name": "big", "emoji": make_png_uri((10, 10))},
        {"name": "dot", "emoji": make_png_uri((1, 1))},
        {"name": "text", "emoji": "not-an-image"},
    ]
    write_source(paths["source_path"], records)

    tally = run(**paths)

    assert read_module(paths["backup_path"]) == ("applemojis", records)
    name, output = read_module(paths["output_path"])
    assert name == "applemojis"
    assert output[2] == records[2]
    assert all(r["emoji"].startswith("data:image/webp;base64,") for r in output[:2])
    assert [r["name"] for r in output] == ["big", "dot", "text"]

    webp_sizes = [len(base64.b64decode(r["emoji"].split(",", 1)[1])) for r in output[:2]]
    assert tally.before == len(make_png((10, 10))) + len(make_png((1, 1)))
    assert tally.after == sum(webp_sizes)

    out = capsys.readouterr().out
    assert f"Original Size:  {format_size(tally.before)}" in out
    assert f"Optimized Size: {format_size(tally.after)}" in out
    assert f"📉 Saved:        {format_size(tally.saved)} ({tally.percent_saved:.1f}%)" in out
    assert str(paths["output_path"]) in out


def test_corrupt_image_leaves_only_the_backup(paths, make_png_uri):
    records = [{"emoji": make_png_uri()}, {"emoji": "data:image/png;base64,bm90IGFuIGltYWdl"}]
    write_source(paths["source_path"], records)

    with pytest.raises(TranscodeError):
        run(**paths)

    assert paths["backup_path"].exists()
    assert not paths["output_path"].exists()


def test_missing_source_exits(paths):
    with pytest.raises(SystemExit):
        run(**paths)
    assert not paths["backup_path"].exists()


def test_unparsable_source_exits(paths):
    paths["source_path"].parent.mkdir(parents=True)
    paths["source_path"].write_text("export default [{emoji: 'x',}];\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        run(**paths)
    assert "❌" in str(exc.value.code)
    assert not paths["backup_path"].exists()


def test_reporter_tracks_processed_count():
    reporter = TqdmReporter(120)
    tally = SizeTally(3000, 1000)
    for done in (50, 100, 120):
        reporter(done, 120, tally)

    assert reporter.bar.n == 120
    assert reporter.bar.postfix == "saved=2.00kB"
    reporter.close()


def test_summary_without_conversions(tmp_path, capsys):
    print_summary(SizeTally(), tmp_path / "out.js")

    assert "(0.0%)" in capsys.readouterr().out


def test_large_image_reports_positive_savings(paths, capsys):
    buf = io.BytesIO()
    Image.effect_noise((200, 200), 64).convert("RGBA").save(buf, "png")
    png = buf.getvalue()
    write_source(paths["source_path"], [{"emoji": "data:image/png;base64," + base64.b64encode(png).decode()}])

    tally = run(**paths)

    assert tally.before == len(png)
    assert 0 < tally.after < tally.before
    assert tally.percent_saved > 0
    out = capsys.readouterr().out
    assert f"📉 Saved:        {format_size(tally.saved)} ({tally.percent_saved:.1f}%)" in out
    assert "(0.0%)" not in out
