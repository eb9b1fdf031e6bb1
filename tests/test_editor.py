import pytest

from subtrack.bidi import PDF, RLE
from subtrack.editor import CueBuffer, CueContent, RawContent, SubtitleEditor
from subtrack.exceptions import EditorError, FetchError
from subtrack.models import SubtitleCue, SubtitleTrack
from subtrack.subtitle_service import SubtitleService

TRACK = SubtitleTrack(label="עברית", lang="he", src="/subs/he.srt")


@pytest.fixture
def editor(make_fetcher, sample_srt, memory_uploader):
    fetcher = make_fetcher({TRACK.src: sample_srt.encode("utf-8")})
    return SubtitleEditor(SubtitleService(fetcher), memory_uploader)


def test_cue_buffer_append_defaults():
    buffer = CueBuffer()
    first = buffer.append(text="a")
    second = buffer.append(text="b")
    assert (first.start_sec, first.end_sec) == (0.0, 2.0)
    assert (second.start_sec, second.end_sec) == (2.0, 4.0)
    assert buffer.is_dirty


def test_cue_buffer_keeps_insertion_order():
    buffer = CueBuffer([SubtitleCue(5.0, 6.0, "late")])
    buffer.append(1.0, 2.0, "early")
    assert [c.text for c in buffer] == ["late", "early"]


def test_cue_buffer_update_and_remove():
    buffer = CueBuffer([SubtitleCue(0.0, 1.0, "a"), SubtitleCue(1.0, 2.0, "b")])
    buffer.update(1, end_sec=3.5, text="B")
    assert buffer[1] == SubtitleCue(1.0, 3.5, "B")
    removed = buffer.remove(0)
    assert removed.text == "a"
    assert len(buffer) == 1
    with pytest.raises(EditorError):
        buffer.remove(5)
    with pytest.raises(EditorError):
        buffer.update(5, text="x")


def test_cue_buffer_does_not_alias_input():
    cues = [SubtitleCue(0.0, 1.0, "a")]
    buffer = CueBuffer(cues)
    buffer.update(0, text="changed")
    assert cues[0].text == "a"


def test_commit_and_discard():
    buffer = CueBuffer([SubtitleCue(0.0, 1.0, "a")])
    buffer.update(0, text="committed")
    vtt = buffer.commit()
    assert vtt == "WEBVTT\n\n00:00:00.000 --> 00:00:01.000\ncommitted"
    assert not buffer.is_dirty

    buffer.append(text="scratch")
    buffer.discard()
    assert [c.text for c in buffer] == ["committed"]
    assert not buffer.is_dirty


def test_commit_with_non_finite_times():
    buffer = CueBuffer()
    buffer.append(0.0, float("nan"), "x")
    assert buffer.commit() == "WEBVTT\n\n00:00:00.000 --> 00:00:00.000\nx"


def test_raw_to_cues_is_lossy():
    raw = RawContent("WEBVTT - title\n\nNOTE hi\n\n1\n00:00:01.000 --> 00:00:02.000\nHi")
    back = raw.to_cues().to_raw()
    assert back.text == "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nHi"
    assert back.text != raw.text


def test_variants_are_identity_on_own_kind():
    raw = RawContent("WEBVTT")
    cues = CueContent(CueBuffer())
    assert raw.to_raw() is raw
    assert cues.to_cues() is cues


def test_open_converts_srt_into_cues(editor):
    session = editor.open(TRACK)
    assert session.mode == "cues"
    assert [c.text for c in session.content.buffer] == ["Hello world", "Line one\nLine two"]


def test_open_raw_mode_has_clean_vtt(editor):
    session = editor.open(TRACK, mode="raw")
    assert session.content.text.startswith("WEBVTT\n\n00:00:01.000 --> 00:00:02.500")


def test_open_unknown_mode(editor):
    with pytest.raises(EditorError):
        editor.open(TRACK, mode="wysiwyg")


def test_open_relative_track_source(editor):
    session = editor.open(TRACK.with_src("subs/he.srt"))
    assert [c.text for c in session.content.buffer] == ["Hello world", "Line one\nLine two"]


def test_open_missing_track(editor):
    with pytest.raises(FetchError):
        editor.open(TRACK.with_src("/subs/missing.vtt"))


def test_save_uploads_and_returns_new_track(editor, memory_uploader):
    session = editor.open(TRACK)
    session.content.buffer.append(text="New cue")
    new_track = session.save()

    assert new_track.src == "https://cdn.example.com/1/subtitles.vtt"
    assert (new_track.label, new_track.lang) == (TRACK.label, TRACK.lang)
    filename, content = memory_uploader.uploads[0]
    assert filename == "subtitles.vtt"
    assert content.endswith("00:00:04.000 --> 00:00:06.000\nNew cue")
    assert not session.content.buffer.is_dirty


def test_save_raw_strips_markers(editor, memory_uploader):
    session = editor.open(TRACK, mode="raw")
    session.content = RawContent(f"WEBVTT\n\n00:00:01.000 --> 00:00:02.000\n{RLE}שלום{PDF}\n")
    session.save()
    _, content = memory_uploader.uploads[0]
    assert RLE not in content and PDF not in content
    assert content.endswith("\nשלום")


def test_save_refuses_empty_content(editor, memory_uploader):
    session = editor.open(TRACK, mode="raw")
    session.content = RawContent("   ")
    with pytest.raises(EditorError):
        session.save()
    assert memory_uploader.uploads == []


def test_switching_modes_keeps_edits(editor):
    session = editor.open(TRACK)
    session.content.buffer.update(0, text="Edited")
    raw = session.switch_to_raw()
    assert "Edited" in raw.text
    cues = session.switch_to_cues()
    assert cues.buffer[0].text == "Edited"
