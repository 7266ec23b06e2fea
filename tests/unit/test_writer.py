import io
import logging

from url_corpus.io.writer import UrlFileWriter, echo_urls, summary_line  # type: ignore


def test_write_joins_without_trailing_newline(tmp_path):
    path = UrlFileWriter(tmp_path / "nested" / "urls.txt").write(["http://a/1", "http://a/2"])
    assert path.read_text() == "http://a/1\nhttp://a/2"


def test_write_overwrites_previous_run(tmp_path):
    target = tmp_path / "urls.txt"
    target.write_text("stale\nstale\nstale")
    UrlFileWriter(target).write(["fresh"])
    assert target.read_text() == "fresh"


def test_echo_lists_urls_then_summary():
    buf = io.StringIO()
    echo_urls(["u1", "u2"], "urls.txt", stream=buf)
    assert buf.getvalue() == "u1\nu2\n\nCreated 'urls.txt' with 2 urls.\n"


def test_summary_line_for_empty_run():
    assert summary_line("x.txt", 0) == "Created 'x.txt' with 0 urls."


def test_write_logs_on_module_logger(tmp_path, caplog):
    with caplog.at_level(logging.INFO, logger="url_corpus.io.writer"):
        UrlFileWriter(tmp_path / "urls.txt").write(["a", "b"])
    record = next(r for r in caplog.records if "Wrote" in r.getMessage())
    assert record.name == "url_corpus.io.writer"
    assert record.getMessage() == f"Wrote 2 urls to {tmp_path / 'urls.txt'}"
