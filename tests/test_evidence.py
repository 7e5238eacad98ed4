"""Evidence registry. Criticality and CID are a non-deterministic stub: tests
check their shape, never specific values."""
import re
import threading

import pytest

from core.evidence.registry import CRITICALITY_LEVELS, EvidenceRegistry, SelectedFile, random_criticality
from core.util.ids import new_cid
from core.util.validation import validate as real_validate

CID_RE = re.compile(r"^CID[A-Z0-9]{9}$")


@pytest.fixture
def registry(db_path, signed_in_auth):
    return EvidenceRegistry(db_path, signed_in_auth)


def test_upload_report_pdf(registry):
    note = registry.submit(SelectedFile(name="report.pdf", media_type="application/pdf", size=1024))
    assert note.title == "Success"
    assert not note.is_error

    top = registry.evidences[0]
    assert top["file_name"] == "report.pdf"
    assert top["file_type"] == "application/pdf"
    assert CID_RE.match(top["cid"])
    assert top["criticality"] in CRITICALITY_LEVELS


def test_list_is_newest_first(registry):
    for name in ["a.txt", "b.png", "c.eml", "d.mp3"]:
        registry.submit(SelectedFile(name=name))
    times = [e["upload_time"] for e in registry.evidences]
    assert times == sorted(times, reverse=True)
    assert [e["file_name"] for e in registry.evidences] == ["d.mp3", "c.eml", "b.png", "a.txt"]


def test_missing_type_falls_back(registry):
    registry.submit(SelectedFile(name="mystery.blob-xyz"))
    assert registry.evidences[0]["file_type"] == "unknown"


def test_type_guessed_from_name_when_not_declared(registry):
    registry.submit(SelectedFile(name="photo.png"))
    assert registry.evidences[0]["file_type"] == "image/png"


def test_no_file_is_a_noop(registry):
    assert registry.submit(None) is None
    assert registry.evidences == []


def test_no_session_is_a_noop(db_path, auth):
    registry = EvidenceRegistry(db_path, auth)
    assert registry.submit(SelectedFile(name="report.pdf")) is None
    assert registry.evidences == []


def test_only_own_evidence_listed(db_path, signed_in_auth, provider):
    registry = EvidenceRegistry(db_path, signed_in_auth)
    registry.submit(SelectedFile(name="mine.pdf"))

    other = provider.sign_up("other@example.com", "password1", {"name": "O", "role": "civilian"})
    registry.fetch_evidences(other.user.id)
    assert registry.evidences == []


def test_fetch_failure_keeps_previous_list(registry, monkeypatch):
    registry.submit(SelectedFile(name="kept.pdf"))
    before = list(registry.evidences)

    def broken(conn, user_id):
        raise RuntimeError("store down")

    monkeypatch.setattr("core.evidence.registry.list_evidences_for_user", broken)
    note = registry.fetch_evidences("anyone")
    assert note.is_error
    assert note.description == "Failed to fetch evidences"
    assert registry.evidences == before


def test_store_rejection_surfaces_message(registry, monkeypatch):
    monkeypatch.setattr("core.evidence.registry.new_cid", lambda rng=None: "not-a-cid")
    note = registry.submit(SelectedFile(name="bad.pdf"))
    assert note.is_error
    assert note.title == "Upload Failed"
    assert "Invalid evidence record" in note.description
    assert not registry.busy


def test_unexpected_failure_is_generic_and_clears_busy(registry, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr("core.evidence.registry.insert_evidence", broken)
    note = registry.submit(SelectedFile(name="x.pdf"))
    assert note.title == "Upload Error"
    assert "disk full" not in note.description
    assert not registry.busy


def test_concurrent_upload_is_refused(registry, monkeypatch):
    entered = threading.Event()
    release = threading.Event()

    def slow_validate(data, schema):
        entered.set()
        release.wait(timeout=5)
        return real_validate(data, schema)

    monkeypatch.setattr("core.evidence.registry.validate", slow_validate)
    results = []
    worker = threading.Thread(target=lambda: results.append(registry.submit(SelectedFile(name="first.pdf"))))
    worker.start()
    assert entered.wait(timeout=5)
    assert registry.busy

    second = registry.submit(SelectedFile(name="second.pdf"))
    assert second.title == "Upload In Progress"

    release.set()
    worker.join(timeout=5)
    assert results[0].title == "Success"
    assert [e["file_name"] for e in registry.evidences] == ["first.pdf"]
    assert not registry.busy


def test_random_labels_have_expected_shape():
    for _ in range(50):
        assert CID_RE.match(new_cid())
        assert random_criticality() in CRITICALITY_LEVELS


def test_selected_file_from_path_reads_metadata_only(tmp_path):
    p = tmp_path / "note.txt"
    p.write_bytes(b"x" * 2048)
    selected = SelectedFile.from_path(str(p))
    assert selected.name == "note.txt"
    assert selected.size == 2048
    assert selected.media_type is None
