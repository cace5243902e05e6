from datetime import date, datetime

import pytest

from tnote.editing import read_edit_file, write_edit_file
from tnote.errors import ValidationError
from tnote.models import Kind, Note


def _note(txt):
    return Note(
        id=1, txt=txt, dt=date(2024, 3, 4), kind=Kind.ENTRY,
        created=datetime(2024, 3, 4), tags=["x", "y"],
    )


def test_written_file_reads_back(tmp_path):
    path = write_edit_file(_note('said "hi" # not a comment\nsecond line'), tmp_path)
    assert path.parent == tmp_path
    assert path.suffix == ".properties"
    text = path.read_text(encoding="utf-8")
    assert text.startswith("date=2024-03-04\n")
    assert "tags=[x,y]" in text

    edit = read_edit_file(path)
    assert edit.dt == date(2024, 3, 4)
    assert edit.content == 'said "hi" # not a comment\nsecond line'
    assert edit.tags == ["x", "y"]


def test_hand_edited_file(tmp_path):
    path = tmp_path / "e.properties"
    path.write_text("date=2024-05-06\ncontent=new words\ntags=[A, b c]\n", encoding="utf-8")
    edit = read_edit_file(path)
    assert (edit.dt, edit.content, edit.tags) == (date(2024, 5, 6), "new words", ["a", "b", "c"])


@pytest.mark.parametrize(
    "body, message",
    [
        ("content=x\ntags=[a]\n", "date missing from file"),
        ("date=2024-01-01\ntags=[a]\n", "content missing from file"),
        ("date=2024-01-01\ncontent=x\n", "tags missing from file"),
        ("date=2024-01-01\ncontent=x\ntags=a,b\n", "tags improperly formatted"),
    ],
)
def test_malformed_files(tmp_path, body, message):
    path = tmp_path / "e.properties"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ValidationError, match=message):
        read_edit_file(path)


def test_bad_date(tmp_path):
    path = tmp_path / "e.properties"
    path.write_text("date=tomorrow\ncontent=x\ntags=[a]\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        read_edit_file(path)
