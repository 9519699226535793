import base64

import pytest

from renderclient.model.results import PresentationSink, RenderResult

from conftest import PNG_BASE64, PNG_BYTES


class TestRenderResult:
    def test_success_decodes(self):
        result = RenderResult.success(PNG_BASE64)
        assert result.ok
        assert result.image == PNG_BYTES
        assert result.encoded == PNG_BASE64

    # "iVBORw0KGgo..." is the documented example with its tail elided; the
    # trailing dots are not base64, so the literal string must be rejected.
    @pytest.mark.parametrize("encoded", ["not base64!", "iVBORw0KGgo...", ""])
    def test_success_rejects_malformed(self, encoded):
        with pytest.raises(ValueError):
            RenderResult.success(encoded)

    def test_failure_has_message(self):
        result = RenderResult.failure("boom")
        assert not result.ok
        assert result.error == "boom"
        assert RenderResult.failure("").error


class TestPresentationSink:
    def test_success_exposes_data_uri(self):
        sink = PresentationSink()
        assert sink.present(RenderResult.success(PNG_BASE64))
        assert sink.image_source == f"data:image/png;base64,{PNG_BASE64}"
        assert sink.image_source.startswith("data:image/png;base64,iVBORw0KGgo")
        assert sink.image_bytes == PNG_BYTES
        assert sink.error is None

    def test_second_image_replaces_first(self):
        second_bytes = b"\x89PNG\r\n\x1a\nsecond"
        second = base64.b64encode(second_bytes).decode()

        sink = PresentationSink()
        sink.present(RenderResult.success(PNG_BASE64))
        sink.present(RenderResult.success(second))

        assert sink.image_source == f"data:image/png;base64,{second}"
        assert sink.image_bytes == second_bytes

    def test_failure_keeps_previous_image(self):
        sink = PresentationSink()
        sink.present(RenderResult.success(PNG_BASE64))
        assert not sink.present(RenderResult.failure("HTTP 500"))

        assert sink.error == "HTTP 500"
        assert sink.image_source == f"data:image/png;base64,{PNG_BASE64}"

    def test_success_clears_previous_error(self):
        sink = PresentationSink()
        sink.present(RenderResult.failure("nope"))
        sink.present(RenderResult.success(PNG_BASE64))
        assert sink.error is None

    def test_clear(self):
        sink = PresentationSink()
        sink.present(RenderResult.success(PNG_BASE64))
        sink.clear()
        assert not sink.has_image
        assert sink.image_source is None


class TestSaveImage:
    def test_save_appends_png_extension(self, tmp_path):
        sink = PresentationSink()
        sink.present(RenderResult.success(PNG_BASE64))

        saved = sink.save(str(tmp_path / "frame"))

        assert saved.endswith("frame.png")
        assert (tmp_path / "frame.png").read_bytes() == PNG_BYTES

    def test_save_without_image_fails(self, tmp_path):
        with pytest.raises(ValueError):
            PresentationSink().save(str(tmp_path / "empty.png"))
