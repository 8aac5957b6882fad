from recoder.classify import MAX_SIZE, classify
from recoder.model import FileTask, OutcomeKind


def _task(tmp_path, data, name="f.txt"):
    p = tmp_path / name
    p.write_bytes(data)
    return FileTask.from_path(p)


def _never_called(data):
    raise AssertionError("sniffer must not run")


def test_empty_file_is_skipped_without_sniffing(tmp_path):
    outcome = classify(_task(tmp_path, b""), sniffer=_never_called)
    assert outcome.kind is OutcomeKind.SKIPPED_EMPTY


def test_too_large_file_is_skipped_without_reading(tmp_path):
    p = tmp_path / "big.txt"
    with p.open("wb") as f:
        f.truncate(MAX_SIZE + 1)
    task = FileTask.from_path(p)

    outcome = classify(task, sniffer=_never_called)

    assert outcome.kind is OutcomeKind.SKIPPED_TOO_LARGE
    assert task._content is None


def test_exactly_max_size_is_not_too_large(tmp_path):
    task = FileTask(path=tmp_path / "x", size=MAX_SIZE, mode=0o644, _content=b"abc")
    outcome = classify(task, sniffer=lambda data: "utf-8")
    assert outcome.kind is OutcomeKind.SKIPPED_ALREADY_UTF8


def test_utf8_without_bom_is_skipped(tmp_path):
    outcome = classify(_task(tmp_path, "naïve café\n".encode("utf-8")))
    assert outcome.kind is OutcomeKind.SKIPPED_ALREADY_UTF8


def test_utf8_with_bom_goes_to_engine(tmp_path):
    assert classify(_task(tmp_path, b"\xef\xbb\xbfhello\n")) is None


def test_legacy_text_goes_to_engine(tmp_path):
    assert classify(_task(tmp_path, "Привет, мир\n".encode("cp1251"))) is None


def test_sniffer_is_pluggable(tmp_path):
    seen = []

    def fake(data):
        seen.append(data)
        return "iso-8859-1"

    task = _task(tmp_path, b"plain ascii")
    assert classify(task, sniffer=fake) is None
    assert seen == [b"plain ascii"]
