"""Unit tests for saving finished stories to disk."""

import base64
import io
import json
import wave

from masal.core.export import decode_data_url, pcm_to_wav, safe_dirname, save_story


class TestPcmToWav:
    def test_wraps_pcm_with_narration_format(self):
        pcm = b"\x00\x00\xff\x7f" * 100

        wav_bytes = pcm_to_wav(pcm)

        with wave.open(io.BytesIO(wav_bytes), "rb") as wav:
            assert wav.getframerate() == 24000
            assert wav.getnchannels() == 1
            assert wav.getsampwidth() == 2
            assert wav.readframes(wav.getnframes()) == pcm


class TestDecodeDataUrl:
    def test_decodes_png(self):
        assert decode_data_url("data:image/png;base64,aGVsbG8=") == (b"hello", "image/png")

    def test_remote_url_is_not_data(self):
        assert decode_data_url("https://picsum.photos/512/512?blur=2&random=0.3") is None

    def test_empty(self):
        assert decode_data_url("") is None


class TestSaveStory:
    def test_writes_assets_and_manifest(self, tmp_path, sample_story):
        sample_story.cover_image_url = "data:image/png;base64," + base64.b64encode(b"cover").decode()
        for page in sample_story.pages:
            page.image_url = "data:image/jpeg;base64," + base64.b64encode(b"page").decode()
            page.audio_base64 = base64.b64encode(b"\x00\x00" * 10).decode()

        story_path = save_story(sample_story, tmp_path / "out")

        data = json.loads(story_path.read_text(encoding="utf-8"))
        assert data["title"] == "Ayşe ve Yıldızlar"
        assert data["cover"] == "cover.png"
        assert (tmp_path / "out" / "cover.png").read_bytes() == b"cover"
        first = data["pages"][0]
        assert first["image"] == "page_01.jpg"
        assert first["audio"] == "page_01.wav"
        assert (tmp_path / "out" / "page_05.wav").exists()

    def test_placeholders_stay_as_urls_and_missing_audio_is_null(self, tmp_path, sample_story):
        placeholder = "https://picsum.photos/512/512?blur=2&random=0.5"
        sample_story.cover_image_url = placeholder
        for page in sample_story.pages:
            page.image_url = placeholder

        story_path = save_story(sample_story, tmp_path)

        data = json.loads(story_path.read_text(encoding="utf-8"))
        assert data["cover"] == placeholder
        assert all(p["image"] == placeholder for p in data["pages"])
        assert all(p["audio"] is None for p in data["pages"])
        assert sorted(f.name for f in tmp_path.iterdir()) == ["story.json"]


class TestSafeDirname:
    def test_replaces_punctuation(self):
        assert safe_dirname("Ayşe ve Yıldızlar!") == "Ayşe_ve_Yıldızlar"

    def test_falls_back_for_empty(self):
        assert safe_dirname("!!!") == "story"
